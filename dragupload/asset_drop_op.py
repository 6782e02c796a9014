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

"""Handles files dropped onto the canvas: resolves names, uploads the assets,
creates the documents and places them next to each other at the drop point.
"""

import asyncio
from logging import getLogger
from typing import Optional

from . import global_vars, paths, reports, utils
from .catalog import fetch_catalog, find_catalog_source
from .datas import Create, Document, Drop, Prefs, Skip, WorldPoint
from .errors import (
    DocumentCreationFailure,
    DragUploadError,
    InvalidViewport,
    ProvisioningFailure,
    UploadFailure,
)
from .resolver import ImportResolver
from .tasks import BatchResult, Task
from .viewport_utils import to_world


logger = getLogger(__name__)


def should_handle_drop(drop: Drop) -> bool:
    """Drops over UI windows, by players, on a canvas which is not ready or without items are ignored."""
    if not drop.items:
        return False
    if not drop.canvas_ready or not drop.user_is_gm:
        return False
    return not drop.over_ui


def build_actor_data(
    name: str,
    img: str,
    folder_id: str,
    actor_type: str = "npc",
    source: Optional[dict] = None,
) -> dict:
    """Actor payload. With a catalog source the actor inherits its stats, name and images are ours."""
    data = {
        "name": name,
        "type": actor_type,
        "img": img,
        "folder": folder_id,
        "prototypeToken": {
            "name": name,
            "texture": {"src": img},
            "displayName": global_vars.TOKEN_DISPLAY_NAME,
            "actorLink": False,
        },
    }
    if source is None:
        return data

    data = utils.merge_dicts(source, data)
    data.pop("_id", None)
    return data


def build_token_data(name: str, actor_id: str, img: str, point: WorldPoint) -> dict:
    return {
        "name": name,
        "actorId": actor_id,
        "texture": {"src": img},
        "x": point.x,
        "y": point.y,
    }


def build_journal_data(name: str, img: str, folder_id: str) -> dict:
    return {
        "name": name,
        "folder": folder_id,
        "pages": [{"name": name, "type": "image", "src": img}],
        "ownership": {"default": global_vars.OWNERSHIP_OBSERVER},
    }


def build_note_data(journal_id: str, point: WorldPoint) -> dict:
    return {
        "entryId": journal_id,
        "x": point.x,
        "y": point.y,
        "texture": {"src": global_vars.NOTE_ICON},
    }


class PlacementOrchestrator:
    """Drives one drop gesture from raw items to placed documents and a single summary.

    With a prompt every item is resolved by the user, strictly one after another.
    Without a prompt all items become documents of `prefs.default_kind` and are imported concurrently.
    """

    def __init__(
        self,
        asset_store,
        document_store,
        viewport,
        prompt=None,
        notifier: Optional[reports.Notifier] = None,
        prefs: Optional[Prefs] = None,
        provisioning: Optional[paths.ProvisioningContext] = None,
    ):
        self.asset_store = asset_store
        self.document_store = document_store
        self.viewport = viewport
        self.prompt = prompt
        self.notifier = notifier
        self.prefs = prefs or Prefs()
        self.provisioning = provisioning

    @property
    def interactive(self) -> bool:
        return self.prompt is not None

    def batch_kinds(self) -> tuple[str, ...]:
        if self.interactive:
            return global_vars.KINDS
        return (self.prefs.default_kind,)

    async def run(self, drop: Drop) -> BatchResult:
        if not should_handle_drop(drop):
            logger.debug("Drop ignored")
            return BatchResult()

        try:
            to_world(self.viewport, drop.screen_x, drop.screen_y)
        except InvalidViewport as e:
            reports.add_report(f"Drop aborted: {e}", type="ERROR", notifier=self.notifier)
            raise

        catalog = ()
        if self.interactive:
            catalog = await self.get_catalog()

        context = self.provisioning or paths.ProvisioningContext(
            self.asset_store, self.document_store, self.prefs.upload_source
        )
        try:
            await self.provision(context)
        except ProvisioningFailure as e:
            reports.add_report(f"Drop aborted: {e}", type="ERROR", notifier=self.notifier)
            raise

        batch = BatchResult([Task(item, i) for i, item in enumerate(drop.items)])
        logger.info(f"Importing {len(batch)} dropped item(s)")
        if self.interactive:
            await self.run_sequential(batch, drop, catalog, context)
        else:
            await self.run_concurrent(batch, drop, context)

        reports.send_batch_summary(batch, self.notifier)
        return batch

    async def get_catalog(self) -> tuple[str, ...]:
        """Snapshot of catalog names, matching is best effort so a failing index gives empty catalog."""
        try:
            return await fetch_catalog(self.document_store)
        except Exception as e:
            logger.warning(f"Could not fetch catalog, names will not be matched: {e}")
            return ()

    async def provision(self, context: paths.ProvisioningContext):
        """Upload directories for every kind this batch can produce.
        Without a prompt the kind is known, so its destination folder is ensured here too.
        With a prompt a folder is ensured on the first item resolved to its kind, see `get_folder`.
        """
        for kind in self.batch_kinds():
            await context.ensure_path(paths.get_upload_path(kind))
        if not self.interactive:
            await self.get_folder(context, self.prefs.default_kind)

    async def get_folder(self, context: paths.ProvisioningContext, kind: str) -> Document:
        """Destination folder of the kind. Coalesced and cached by the context, created at most once per batch."""
        return await context.ensure_folder(self.prefs.folder_name(kind), global_vars.FOLDER_TYPES[kind])

    async def run_sequential(self, batch: BatchResult, drop: Drop, catalog, context):
        for task in batch.tasks:
            resolver = ImportResolver(
                task.item, task.index, len(batch), catalog, self.prefs.title_case_names
            )
            task.change_progress(0, "waiting for user")
            decision = await resolver.resolve(self.prompt)
            if isinstance(decision, Skip):
                task.skipped(decision.reason)
                continue
            await self.import_item(task, decision, drop, context)

    async def run_concurrent(self, batch: BatchResult, drop: Drop, context):
        kind = self.prefs.default_kind
        for task in batch.tasks:
            name = utils.derive_label(task.item.original_filename, self.prefs.title_case_names)
            decision = Create(kind=kind, final_name=name)
            task.async_task = asyncio.ensure_future(
                self.import_item(task, decision, drop, context)
            )
            task.async_task.set_name(f"{task.task_type}-{task.task_id}")
            task.async_task.add_done_callback(task.handle_async_errors)
        await asyncio.gather(*(t.async_task for t in batch.tasks), return_exceptions=True)

    def get_coordinates(self, drop: Drop, index: int) -> WorldPoint:
        point = to_world(
            self.viewport, drop.screen_x, drop.screen_y, index * self.prefs.stagger
        )
        if drop.free_placement:
            return point
        return WorldPoint(*self.viewport.snap(point.x, point.y))

    async def import_item(self, task: Task, decision: Create, drop: Drop, context):
        """Upload, create and place one item. Failures are recorded on the task, never raised."""
        filename = task.item.original_filename
        try:
            folder = await self.get_folder(context, decision.kind)
            task.change_progress(10, "uploading")
            img = await self.upload_asset(task, decision.kind)
            task.change_progress(50, "creating documents")
            document = await self.create_documents(task, decision, drop, folder, img)
        except DragUploadError as e:
            task.error(str(e))
            reports.add_report(
                f"Import of {filename} failed: {e}", type="ERROR", notifier=self.notifier
            )
            return

        task.result.update(
            {"document_id": document.id, "name": document.name, "kind": decision.kind, "img": img}
        )
        task.finished(f"{decision.kind} {document.name} created")
        logger.info(f"{filename} imported as {decision.kind} {document.name} ({document.id})")

    async def upload_asset(self, task: Task, kind: str) -> str:
        """Stored asset reference. External items are registered by their URL, nothing is uploaded."""
        item = task.item
        if item.is_external:
            return item.external_url

        filename = utils.get_unique_filename(item.original_filename)
        try:
            return await self.asset_store.upload(
                self.prefs.upload_source,
                paths.get_upload_path(kind),
                filename,
                item.raw_bytes or b"",
                item.mime_hint,
            )
        except UploadFailure:
            raise
        except Exception as e:
            raise UploadFailure(f"upload of {filename} failed: {e}") from e

    async def create_documents(
        self, task: Task, decision: Create, drop: Drop, folder: Document, img: str
    ) -> Document:
        """Create the document and its placement. An uploaded asset stays in place on failure."""
        name = decision.final_name
        try:
            if decision.kind == global_vars.KIND_ACTOR:
                source = await find_catalog_source(self.document_store, name)
                point = self.get_coordinates(drop, task.index)
                actor = await self.document_store.create_actor(
                    build_actor_data(name, img, folder.id, self.prefs.actor_type, source)
                )
                await self.document_store.create_token(
                    build_token_data(name, actor.id, img, point)
                )
                return actor

            point = self.get_coordinates(drop, task.index)
            journal = await self.document_store.create_journal(
                build_journal_data(name, img, folder.id)
            )
            await self.document_store.create_note(build_note_data(journal.id, point))
            return journal
        except (DocumentCreationFailure, InvalidViewport):
            raise
        except Exception as e:
            raise DocumentCreationFailure(f"creating {decision.kind} {name!r} failed: {e}") from e
