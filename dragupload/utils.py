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

"""Contains utility functions for the drop pipeline. Mix of everything."""

import copy
import json
import platform
import re
import time
from typing import Optional

from . import global_vars


EXTENSION_RE = re.compile(r"\.[^/.]+$")
SEPARATORS_RE = re.compile(r"[_\s-]+")


def strip_extension(filename: str) -> str:
    return EXTENSION_RE.sub("", filename)


def to_title_case(text: str) -> str:
    """Lowercase everything, split on separators and capitalize first letter of every word."""
    words = [w for w in SEPARATORS_RE.split(text.lower()) if w]
    return " ".join(w[0].upper() + w[1:] for w in words)


def derive_label(filename: str, title_case: bool = False) -> str:
    """Human readable label from a filename.
    Extension is stripped, runs of underscores, hyphens and whitespace become a single space.
    """
    raw_name = strip_extension(filename)
    if title_case:
        return to_title_case(raw_name)
    words = [w for w in SEPARATORS_RE.split(raw_name) if w]
    return " ".join(words)


def get_unique_filename(filename: str, timestamp: Optional[int] = None) -> str:
    """Filename which will not collide with earlier uploads of the same file.
    Every non-alphanumeric character of the base name is replaced with underscore,
    timestamp in milliseconds is appended before the extension.
    """
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    parts = filename.split(".")
    ext = parts.pop() if len(parts) > 1 else ""
    base = re.sub(r"[^a-zA-Z0-9]", "_", ".".join(parts))
    if ext == "":
        return f"{base}_{timestamp}"
    return f"{base}_{timestamp}.{ext}"


def merge_dicts(original: dict, other: dict) -> dict:
    """Recursively merge `other` into a deep copy of `original`. Values of `other` win."""
    result = copy.deepcopy(original)
    for key, value in other.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def get_headers(api_key: str = "") -> dict[str, str]:
    """Get headers with or without authorization."""
    headers = {
        "accept": "application/json",
        "Platform-Version": platform.platform(),
        "addon-id": global_vars.ADDON_ID,
    }
    if not api_key:
        return headers

    headers["Authorization"] = f"Bearer {api_key}"
    return headers


def extract_error_message(
    exception: Exception,
    resp_text: Optional[str],
    resp_status: int = -1,
    prefix: str = "",
) -> tuple[str, str]:
    """Extract error message from exception, response text and response json.
    Returns the best message constructed from these sources:
    1. prefers "detail" key from JSON response, or whole JSON,
    2. response text - usually HTML error page,
    3. exception message - usually connection error, other errors.
    """
    if prefix != "":
        prefix += ": "

    if resp_status != -1:
        status_string = f" ({resp_status})"
    else:
        status_string = ""

    if resp_text is None:
        resp_text = ""
    try:
        resp_json = json.loads(resp_text)
    except json.decoder.JSONDecodeError:
        resp_json = {}
    if not isinstance(resp_json, dict):
        resp_json = {"response": resp_json}

    # JSON not available
    if resp_json == {}:
        msg = f"{prefix}{exception}{status_string}"
        detail = f"{prefix}{type(exception)}: {exception}{status_string} {resp_text}"
        return msg, detail.strip()

    detail = resp_json.get("detail")
    if detail is None:
        msg = f"{prefix}{resp_json}{status_string}"
        detail = f"{prefix}{type(exception)}: {exception}{status_string} {resp_text}"
        return msg, detail.strip()

    if not isinstance(detail, dict):
        msg = f"{prefix}{detail}{status_string}"
        detail = f"{prefix}{exception}: {msg}"
        return msg, detail

    detail = dict(detail)
    status_code = detail.pop("statusCode", None)
    errstring = " ".join(f"{key}: {detail[key]}" for key in detail)
    msg = f"{prefix}{errstring}{status_string}"
    detail = f"{prefix}{exception}: {msg} ({status_code})"
    return msg, detail
