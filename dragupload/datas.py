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
from typing import Optional, Union

from . import global_vars


@dataclasses.dataclass
class Prefs:
    """Preferences of the drop pipeline. Persisted by persistent_preferences."""

    upload_source: str = global_vars.DEFAULT_UPLOAD_SOURCE
    actor_folder_name: str = global_vars.DEFAULT_FOLDER_NAMES[global_vars.KIND_ACTOR]
    note_folder_name: str = global_vars.DEFAULT_FOLDER_NAMES[global_vars.KIND_NOTE]
    stagger: int = global_vars.STAGGER
    title_case_names: bool = False
    actor_type: str = "npc"
    default_kind: str = global_vars.KIND_ACTOR
    server: str = global_vars.SERVER
    api_key: str = ""
    ssl_context: str = "CERTIFI"  # CERTIFI / SYSTEM / DISABLED

    def folder_name(self, kind: str) -> str:
        if kind == global_vars.KIND_ACTOR:
            return self.actor_folder_name
        return self.note_folder_name


@dataclasses.dataclass(frozen=True)
class DroppedItem:
    """One file or external reference captured from a drop event."""

    original_filename: str
    raw_bytes: Optional[bytes] = None
    external_url: str = ""
    mime_hint: str = ""

    @property
    def is_external(self) -> bool:
        return self.raw_bytes is None and self.external_url != ""


@dataclasses.dataclass(frozen=True)
class Drop:
    """All items delivered by a single drop gesture, with the state of the canvas at drop time."""

    items: tuple[DroppedItem, ...]
    screen_x: float
    screen_y: float
    free_placement: bool = False  # shift held, no grid snapping
    canvas_ready: bool = True
    user_is_gm: bool = True
    over_ui: bool = False


@dataclasses.dataclass(frozen=True)
class WorldPoint:
    x: float
    y: float


@dataclasses.dataclass(frozen=True)
class ResolutionRequest:
    item: DroppedItem
    suggested_name: str
    matched_catalog_name: Optional[str]
    sequence_index: int
    batch_size: int
    catalog: tuple[str, ...] = ()

    @property
    def is_match(self) -> bool:
        return self.matched_catalog_name is not None

    @property
    def initial_name(self) -> str:
        return self.matched_catalog_name or self.suggested_name

    @property
    def title(self) -> str:
        return f"Import {self.sequence_index + 1}/{self.batch_size}: {self.item.original_filename}"


@dataclasses.dataclass(frozen=True)
class Skip:
    reason: str = "skipped"


@dataclasses.dataclass(frozen=True)
class Create:
    kind: str
    final_name: str


ResolutionResult = Union[Skip, Create]


@dataclasses.dataclass
class Document:
    """Reference to a document created in the document store."""

    id: str
    name: str
    type: str = ""
