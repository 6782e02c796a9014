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
import uuid
from logging import getLogger
from typing import Optional

from .datas import DroppedItem


logger = getLogger(__name__)


class Task:
    """Holds all information about import of one dropped item."""

    def __init__(
        self,
        item: DroppedItem,
        index: int,
        task_type: str = "item_import",
        task_id: str = "",
        message: str = "",
        progress: int = 0,
        status: str = "created",
        result: Optional[dict] = None,
    ):
        if task_id == "":
            task_id = str(uuid.uuid4())

        self.item = item
        self.index = index
        self.task_id = task_id
        self.task_type = task_type

        self.message = message
        self.progress = progress
        self.status = status  # created / skipped / finished / error
        if result is None:
            self.result = {}
        else:
            self.result = result.copy()

        self.async_task: Optional[asyncio.Task] = None

    @property
    def document_id(self) -> Optional[str]:
        return self.result.get("document_id")

    def change_progress(self, progress: int, message: str, status: str = ""):
        self.progress = progress
        self.message = message
        if status != "":
            self.status = status

    def error(self, message: str, progress: int = -1):
        self.message = message
        self.status = "error"
        if progress != -1:
            self.progress = progress

    def skipped(self, message: str):
        self.message = message
        self.status = "skipped"

    def finished(self, message: str):
        self.message = message
        self.status = "finished"
        self.progress = 100

    def handle_async_errors(self, atask: asyncio.Task):
        """Done callback: marks the task as failed if its asyncio task raised."""
        if atask.cancelled():
            self.error("cancelled")
            return
        exception = atask.exception()
        if exception is None:
            return
        logger.error(f"Import of {self.item.original_filename} crashed: {exception!r}")
        self.error(str(exception))

    def __str__(self):
        return f"ID={self.task_id}, FILE={self.item.original_filename}, STATUS={self.status}"


class BatchResult:
    """Ordered outcome of a batch, one task per dropped item."""

    def __init__(self, tasks: Optional[list[Task]] = None):
        self.tasks = tasks or []

    def pairs(self) -> list[tuple[str, Optional[str]]]:
        """(original filename, created document id or None) in arrival order."""
        return [(t.item.original_filename, t.document_id) for t in self.tasks]

    def created(self) -> list[Task]:
        return [t for t in self.tasks if t.status == "finished"]

    def failed(self) -> list[Task]:
        return [t for t in self.tasks if t.status == "error"]

    def __len__(self):
        return len(self.tasks)
