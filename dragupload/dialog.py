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

"""Console rendition of the import dialog."""

import asyncio
from typing import Callable, Optional

from . import global_vars
from .datas import Create, ResolutionRequest, ResolutionResult, Skip


MATCH_INDICATOR = "matched"
NEW_INDICATOR = "new"
CHOICES = {
    "a": global_vars.KIND_ACTOR,
    "actor": global_vars.KIND_ACTOR,
    "h": global_vars.KIND_NOTE,
    "handout": global_vars.KIND_NOTE,
    "j": global_vars.KIND_NOTE,
    "journal": global_vars.KIND_NOTE,
}
SKIP_CHOICES = ("s", "skip")
MAX_SUGGESTIONS = 10


def format_request(request: ResolutionRequest) -> str:
    """Dialog text. Whether the name reuses a catalog entry is visible before confirming."""
    if request.is_match:
        indicator = f"[{MATCH_INDICATOR}] reuses catalog entry {request.matched_catalog_name!r}"
    else:
        indicator = f"[{NEW_INDICATOR}] no catalog entry, a new one will be created"
    lines = [request.title, f"Asset Name: {request.initial_name}", indicator]
    if request.catalog:
        shown = ", ".join(request.catalog[:MAX_SUGGESTIONS])
        more = len(request.catalog) - MAX_SUGGESTIONS
        if more > 0:
            shown += f" (+{more} more)"
        lines.append(f"Catalog: {shown}")
    return "\n".join(lines)


def parse_choice(choice: str, name: str) -> Optional[ResolutionResult]:
    choice = choice.strip().lower() or "a"
    if choice in SKIP_CHOICES:
        return Skip()
    kind = CHOICES.get(choice)
    if kind is None:
        return None
    return Create(kind=kind, final_name=name)


class ConsolePrompt:
    """Interactive prompt on stdin/stdout. End of input dismisses the dialog."""

    def __init__(self, input_func: Callable[[str], str] = input, output=print):
        self.input_func = input_func
        self.output = output

    async def ask(self, request: ResolutionRequest) -> Optional[ResolutionResult]:
        return await asyncio.to_thread(self._ask, request)

    def _ask(self, request: ResolutionRequest) -> Optional[ResolutionResult]:
        self.output(format_request(request))
        try:
            name = self.input_func(f"Name [{request.initial_name}]: ").strip()
            while True:
                choice = self.input_func("[A]ctor / [H]andout / [S]kip: ")
                result = parse_choice(choice, name or request.initial_name)
                if result is not None:
                    return result
                self.output(f"Unknown choice {choice!r}")
        except EOFError:
            return None


class ConsoleNotifier:
    """Notifications and the private batch summary printed to the console."""

    def __init__(self, output=print):
        self.output = output

    def notify(self, text: str, type: str = "INFO"):
        self.output(f"[{type}] {text}")

    def whisper(self, text: str):
        self.output(text)
