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

import asyncio
import os
from logging import getLogger
from typing import Awaitable, Callable

from . import global_vars
from .datas import Document
from .errors import AlreadyExists, DuplicateFolder, ProvisioningFailure


logger = getLogger(__name__)


def get_upload_path(kind: str) -> str:
    """Asset store directory for uploads of given kind, e.g. uploads/dragupload/actors."""
    return f"uploads/{global_vars.ADDON_ID}/{kind}s"


def get_path_segments(path: str) -> list[str]:
    """Cumulative segments of a "/" delimited path, root first.
    "a/b/c" gives ["a", "a/b", "a/b/c"]. Empty segments are dropped.
    """
    parts = [p for p in path.split("/") if p]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


def get_config_dir_path() -> str:
    """Get the path to the config directory, honours XDG_CONFIG_HOME."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if not config_home:
        config_home = os.path.join(os.path.expanduser("~"), ".config")
    return os.path.abspath(os.path.join(config_home, global_vars.ADDON_ID))


def ensure_config_dir_exists() -> str:
    config_dir = get_config_dir_path()
    os.makedirs(config_dir, exist_ok=True)
    return config_dir


async def ensure_path(asset_store, source: str, path: str) -> str:
    """Create every ancestor of `path` in the asset store, strictly root to leaf.
    Existing directories count as success. Failures of intermediate segments are logged
    and ignored, a failure of the deepest segment raises ProvisioningFailure.
    Calling it again for the same path is a no-op.
    """
    segments = get_path_segments(path)
    for segment in segments:
        try:
            await asset_store.create_directory(source, segment)
            logger.debug(f"Created directory {source}:{segment}")
        except AlreadyExists:
            logger.debug(f"Directory {source}:{segment} already exists")
        except Exception as e:
            if segment != segments[-1]:
                logger.warning(f"Could not create directory {source}:{segment}: {e}")
                continue
            raise ProvisioningFailure(
                f"Could not create directory {source}:{segment}: {e}"
            ) from e
    return path


class ProvisioningContext:
    """Provisioning state of one batch.
    Remembers provisioned paths and folders and coalesces concurrent ensure calls,
    so that only one create request per key is in flight at any time.
    """

    def __init__(self, asset_store, document_store, source: str):
        self.asset_store = asset_store
        self.document_store = document_store
        self.source = source
        self._done: dict[tuple, object] = {}
        self._in_flight: dict[tuple, asyncio.Future] = {}

    async def _coalesce(self, key: tuple, factory: Callable[[], Awaitable]):
        if key in self._done:
            return self._done[key]

        pending = self._in_flight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(factory())
            self._in_flight[key] = pending
            pending.add_done_callback(lambda _: self._in_flight.pop(key, None))

        result = await asyncio.shield(pending)
        self._done[key] = result
        return result

    async def ensure_path(self, path: str) -> str:
        return await self._coalesce(
            ("path", self.source, path),
            lambda: ensure_path(self.asset_store, self.source, path),
        )

    async def ensure_folder(self, name: str, folder_type: str) -> Document:
        """At most one folder per (name, type). Find it, or create it when missing."""
        return await self._coalesce(
            ("folder", name, folder_type),
            lambda: self._find_or_create_folder(name, folder_type),
        )

    async def _find_or_create_folder(self, name: str, folder_type: str) -> Document:
        try:
            folder = await self.document_store.find_folder(name, folder_type)
            if folder is not None:
                return folder
            try:
                folder = await self.document_store.create_folder(name, folder_type)
                logger.info(f"Created folder {name!r} ({folder_type})")
                return folder
            except DuplicateFolder:
                # created by another batch between our lookup and create
                logger.debug(f"Folder {name!r} ({folder_type}) created concurrently")
            folder = await self.document_store.find_folder(name, folder_type)
        except Exception as e:
            raise ProvisioningFailure(
                f"Could not ensure folder {name!r} ({folder_type}): {e}"
            ) from e

        if folder is None:
            raise ProvisioningFailure(
                f"Folder {name!r} ({folder_type}) reported as duplicate but not found"
            )
        return folder
