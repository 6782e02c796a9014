# ##### BEGIN GPL LICENSE BLOCK #####
#
#  This program is free software; you can redistribute it and/or
#  modify it under the terms of the GNU General Public License
#  as published by the Free Software Foundation; either version 2
#  of the License, or (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program; if not, write to the Free Software Foundation,
#  Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
#
# ##### END GPL LICENSE BLOCK #####

import dataclasses
import json
import os
from logging import getLogger
from typing import Optional

from . import global_vars, paths
from .datas import Prefs


logger = getLogger(__name__)


def get_preferences_path() -> str:
    """Return path to the persistent JSON preferences file."""
    return os.path.join(paths.get_config_dir_path(), "preferences.json")


def write_preferences_to_JSON(prefs: Prefs, preferences_path: Optional[str] = None):
    if preferences_path is None:
        paths.ensure_config_dir_exists()
        preferences_path = get_preferences_path()
    try:
        with open(preferences_path, "w", encoding="utf-8") as s:
            json.dump(dataclasses.asdict(prefs), s, ensure_ascii=False, indent=4)
        logger.info(f"Saved preferences to {preferences_path}")
    except Exception as e:
        logger.warning(f"Failed to save preferences: {e}")


def coerce_value(value, default):
    """Value converted to the type of the default. Raises ValueError when it does not fit."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        raise ValueError(f"expected true or false, got {value!r}")
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"expected a number, got {value!r}")
        return int(value)
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def prefs_from_dict(data: dict) -> Prefs:
    """Known keys override defaults, unknown keys are ignored.
    Values of a wrong type fall back to the default with a warning.
    """
    defaults = Prefs()
    values = {}
    for field in dataclasses.fields(Prefs):
        if field.name not in data:
            continue
        default = getattr(defaults, field.name)
        try:
            values[field.name] = coerce_value(data[field.name], default)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Invalid preference {field.name}: {e}, using {default!r}")
    prefs = dataclasses.replace(defaults, **values)

    if prefs.upload_source not in global_vars.UPLOAD_SOURCES:
        logger.warning(f"Unknown upload source {prefs.upload_source!r}, using {defaults.upload_source!r}")
        prefs.upload_source = defaults.upload_source
    if prefs.default_kind not in global_vars.KINDS:
        logger.warning(f"Unknown default kind {prefs.default_kind!r}, using {defaults.default_kind!r}")
        prefs.default_kind = defaults.default_kind
    if prefs.ssl_context not in ("CERTIFI", "SYSTEM", "DISABLED"):
        logger.warning(f"Unknown SSL context {prefs.ssl_context!r}, using {defaults.ssl_context!r}")
        prefs.ssl_context = defaults.ssl_context
    return prefs


def load_preferences_from_JSON(preferences_path: Optional[str] = None) -> Prefs:
    """Load preferences from JSON file. Missing file gives defaults, corrupt file is removed."""
    if preferences_path is None:
        preferences_path = get_preferences_path()
    if not os.path.exists(preferences_path):
        prefs = Prefs()
    else:
        try:
            with open(preferences_path, "r", encoding="utf-8") as s:
                data = json.load(s)
            if not isinstance(data, dict):
                raise ValueError(f"expected JSON object, got {type(data).__name__}")
            prefs = prefs_from_dict(data)
            logger.info(f"Successfully loaded preferences from {preferences_path}")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read preferences from JSON: {e}")
            os.remove(preferences_path)
            prefs = Prefs()

    global_vars.PREFS.clear()
    global_vars.PREFS.update(dataclasses.asdict(prefs))
    return prefs
