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

"""Command line entry point: drops local files or one URL onto the active scene of a host."""

import asyncio
import mimetypes
import os
import sys
from argparse import ArgumentParser
from logging import getLogger
from urllib.parse import urlparse

from . import global_vars, register
from .asset_drop_op import PlacementOrchestrator
from .client_lib import HttpAssetStore, HttpDocumentStore, create_session
from .datas import Drop, DroppedItem, Prefs
from .dialog import ConsoleNotifier, ConsolePrompt
from .errors import DragUploadError
from .persistent_preferences import load_preferences_from_JSON
from .viewport_utils import StaticViewport


logger = getLogger(__name__)


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="dragupload", description=__doc__)
    parser.add_argument("files", nargs="*", help="image files to drop")
    parser.add_argument("--url", default="", help="external image URL, used when no files are given")
    parser.add_argument("--x", type=float, default=0.0, help="screen x of the drop")
    parser.add_argument("--y", type=float, default=0.0, help="screen y of the drop")
    parser.add_argument("--pan", type=float, nargs=2, default=(0.0, 0.0), metavar=("TX", "TY"))
    parser.add_argument("--zoom", type=float, default=1.0)
    parser.add_argument("--grid", type=int, default=100, help="grid size, 0 disables snapping")
    parser.add_argument("--free", action="store_true", help="place freely, no grid snapping")
    parser.add_argument("--no-prompt", action="store_true", help="import everything as --kind without asking")
    parser.add_argument("--kind", choices=global_vars.KINDS, default=None)
    parser.add_argument("--server", default=None)
    parser.add_argument("--api-key", default=None)
    parser.add_argument("--config", default=None, help="path to preferences JSON")
    return parser


def read_items(files: list[str], url: str) -> tuple[DroppedItem, ...]:
    items = []
    for file_path in files:
        with open(file_path, "rb") as f:
            data = f.read()
        mime, _ = mimetypes.guess_type(file_path)
        items.append(DroppedItem(os.path.basename(file_path), raw_bytes=data, mime_hint=mime or ""))
    if not items and url:
        filename = os.path.basename(urlparse(url).path) or "external"
        mime, _ = mimetypes.guess_type(filename)
        items.append(DroppedItem(filename, external_url=url, mime_hint=mime or ""))
    return tuple(items)


async def drop_files(prefs: Prefs, drop: Drop, viewport, interactive: bool):
    async with create_session(prefs) as session:
        orchestrator = PlacementOrchestrator(
            HttpAssetStore(session, prefs.server),
            HttpDocumentStore(session, prefs.server),
            viewport,
            prompt=ConsolePrompt() if interactive else None,
            notifier=ConsoleNotifier(),
            prefs=prefs,
        )
        return await orchestrator.run(drop)


def main(argv=None) -> int:
    args = get_parser().parse_args(argv)
    register()

    prefs = load_preferences_from_JSON(args.config)
    if args.server:
        prefs.server = args.server
    if args.api_key:
        prefs.api_key = args.api_key
    if args.kind:
        prefs.default_kind = args.kind

    items = read_items(args.files, args.url)
    if not items:
        logger.error("Nothing to drop, give files or --url")
        return 2

    viewport = StaticViewport(args.pan[0], args.pan[1], args.zoom, args.grid)
    drop = Drop(items, args.x, args.y, free_placement=args.free)
    try:
        batch = asyncio.run(drop_files(prefs, drop, viewport, not args.no_prompt))
    except DragUploadError as e:
        logger.error(f"Drop failed: {e}")
        return 1
    return 0 if not batch.failed() else 1


if __name__ == "__main__":
    sys.exit(main())
