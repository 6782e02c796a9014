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

"""In-memory collaborators for tests.

Stores keep every call, so tests can check ordering and deduplication of requests.
"""

import asyncio
from typing import Optional

from dragupload.datas import Create, Document, ResolutionRequest
from dragupload.errors import AlreadyExists, DuplicateFolder


class FakeAssetStore:
    def __init__(self, strict_parents=True, fail_paths=(), fail_files=(), delay=0):
        self.directories = set()
        self.calls = []
        self.uploads = {}
        self.strict_parents = strict_parents
        self.fail_paths = set(fail_paths)
        self.fail_files = set(fail_files)
        self.delay = delay

    async def create_directory(self, source: str, path: str):
        self.calls.append(("mkdir", source, path))
        await asyncio.sleep(self.delay)
        if path in self.fail_paths:
            raise RuntimeError(f"backend refused {path}")
        if path in self.directories:
            raise AlreadyExists(path)
        parent = path.rpartition("/")[0]
        if self.strict_parents and parent and parent not in self.directories:
            raise RuntimeError(f"parent of {path} does not exist")
        self.directories.add(path)

    async def upload(self, source, path, filename, data, mime=""):
        self.calls.append(("upload", source, path, filename))
        await asyncio.sleep(self.delay)
        if any(filename.startswith(prefix) for prefix in self.fail_files):
            raise RuntimeError(f"upload of {filename} refused")
        reference = f"{path}/{filename}"
        self.uploads[reference] = data
        return reference


class FakeDocumentStore:
    def __init__(self, catalog=(), catalog_documents=None, fail_kinds=(), delay=0):
        self.index = [{"_id": f"c{i}", "name": name} for i, name in enumerate(catalog)]
        self.catalog_documents = catalog_documents or {}
        self.fail_kinds = set(fail_kinds)
        self.delay = delay
        self.folders = []
        self.actors = []
        self.journals = []
        self.tokens = []
        self.notes = []
        self.calls = []
        self._next_id = 0

    def new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}{self._next_id}"

    async def get_catalog_index(self):
        self.calls.append(("catalog_index",))
        return list(self.index)

    async def get_catalog_document(self, entry_id):
        self.calls.append(("catalog_document", entry_id))
        return self.catalog_documents[entry_id]

    async def find_folder(self, name, folder_type) -> Optional[Document]:
        self.calls.append(("find_folder", name, folder_type))
        await asyncio.sleep(self.delay)
        for folder in self.folders:
            if folder.name == name and folder.type == folder_type:
                return folder
        return None

    async def create_folder(self, name, folder_type) -> Document:
        self.calls.append(("create_folder", name, folder_type))
        await asyncio.sleep(self.delay)
        if any(f.name == name and f.type == folder_type for f in self.folders):
            raise DuplicateFolder(name)
        folder = Document(self.new_id("f"), name, folder_type)
        self.folders.append(folder)
        return folder

    async def _create(self, kind, collection, data, prefix):
        self.calls.append(("create", kind, data.get("name", "")))
        await asyncio.sleep(self.delay)
        if kind in self.fail_kinds:
            raise RuntimeError(f"{kind} creation refused")
        document = Document(self.new_id(prefix), data.get("name", ""), kind)
        collection.append((document, data))
        return document

    async def create_actor(self, data):
        return await self._create("Actor", self.actors, data, "a")

    async def create_journal(self, data):
        return await self._create("JournalEntry", self.journals, data, "j")

    async def create_token(self, data):
        return await self._create("Token", self.tokens, data, "t")

    async def create_note(self, data):
        return await self._create("Note", self.notes, data, "n")


class ScriptedPrompt:
    """Answers prompts from a list. An answer can be a result, None (dismissed) or an exception to raise.
    With no answer left the suggested name is accepted as an actor.
    """

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.requests: list[ResolutionRequest] = []
        self.open = 0
        self.max_open = 0

    async def ask(self, request: ResolutionRequest):
        self.requests.append(request)
        self.open += 1
        self.max_open = max(self.max_open, self.open)
        try:
            await asyncio.sleep(0)
            if not self.answers:
                return Create("actor", request.initial_name)
            answer = self.answers.pop(0)
            if isinstance(answer, Exception):
                raise answer
            return answer
        finally:
            self.open -= 1


class RecordingNotifier:
    def __init__(self):
        self.notifications = []
        self.whispers = []

    def notify(self, text, type="INFO"):
        self.notifications.append((type, text))

    def whisper(self, text):
        self.whispers.append(text)
