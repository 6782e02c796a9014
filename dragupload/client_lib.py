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

"""Asset store and document store talking to the host over its HTTP API."""

import ssl
from logging import getLogger
from typing import Optional, Union

import aiohttp
import certifi

from . import global_vars, log, utils
from .datas import Document, Prefs
from .errors import (
    AlreadyExists,
    DocumentCreationFailure,
    DragUploadError,
    DuplicateFolder,
    UploadFailure,
)


logger = getLogger(__name__)

API = "/api/v1"


def get_ssl_context(mode: str = "CERTIFI") -> Union[ssl.SSLContext, bool]:
    """SSL context for the connector. DISABLED turns certificate verification off."""
    if mode == "DISABLED":
        return False
    if mode == "SYSTEM":
        return ssl.create_default_context()
    return ssl.create_default_context(cafile=certifi.where())


def create_session(prefs: Prefs) -> aiohttp.ClientSession:
    log.register_secret(prefs.api_key)
    connector = aiohttp.TCPConnector(ssl=get_ssl_context(prefs.ssl_context))
    timeout = aiohttp.ClientTimeout(total=global_vars.TIMEOUT)
    return aiohttp.ClientSession(
        connector=connector,
        timeout=timeout,
        headers=utils.get_headers(prefs.api_key),
        trust_env=True,
    )


class HostClient:
    def __init__(self, session: aiohttp.ClientSession, server: str):
        self.session = session
        self.server = server.rstrip("/")

    def url(self, endpoint: str) -> str:
        return f"{self.server}{API}{endpoint}"

    async def request(
        self,
        method: str,
        endpoint: str,
        error_class: type = DragUploadError,
        prefix: str = "",
        conflict_class: Optional[type] = None,
        **kwargs,
    ):
        """Make request and return the JSON response.
        HTTP 409 raises `conflict_class` when given, every other failure raises `error_class`.
        """
        url = self.url(endpoint)
        resp_text, resp_status = None, -1
        try:
            async with self.session.request(method, url, **kwargs) as resp:
                resp_status = resp.status
                resp_text = await resp.text()
                if resp.status == 409 and conflict_class is not None:
                    raise conflict_class(f"{prefix}: {resp_text}")
                resp.raise_for_status()
                logger.debug(f"Got response ({resp.status}) for {method} {url}")
                return await resp.json()
        except DragUploadError:
            raise
        except Exception as e:
            msg, detail = utils.extract_error_message(e, resp_text, resp_status, prefix)
            logger.error(detail)
            raise error_class(msg) from e


class HttpAssetStore(HostClient):
    async def create_directory(self, source: str, path: str):
        await self.request(
            "POST",
            "/files/directories/",
            prefix="Create directory",
            conflict_class=AlreadyExists,
            json={"source": source, "target": path},
        )

    async def upload(
        self, source: str, path: str, filename: str, data: bytes, mime: str = ""
    ) -> str:
        """Upload file and return the resolved path the host serves it from."""
        form = aiohttp.FormData()
        form.add_field("source", source)
        form.add_field("target", path)
        form.add_field(
            "file", data, filename=filename, content_type=mime or "application/octet-stream"
        )
        logger.info(f"Uploading {filename} to {source}:{path}")
        resp_json = await self.request(
            "POST", "/files/upload/", error_class=UploadFailure, prefix="Upload", data=form
        )
        try:
            return resp_json["path"]
        except (KeyError, TypeError) as e:
            raise UploadFailure(f"Upload: response without path: {resp_json}") from e


def to_document(resp_json: dict, document_type: str = "") -> Document:
    try:
        return Document(id=resp_json["_id"], name=resp_json.get("name", ""), type=document_type)
    except (KeyError, TypeError, AttributeError) as e:
        raise DocumentCreationFailure(f"response without _id: {resp_json}") from e


class HttpDocumentStore(HostClient):
    async def get_catalog_index(self, document_type: str = "Actor") -> list[dict]:
        """Index entries (_id, name) of all catalog packs holding given document type."""
        return await self.request(
            "GET", "/catalog/index/", prefix="Catalog index", params={"type": document_type}
        )

    async def get_catalog_document(self, entry_id: str) -> dict:
        return await self.request("GET", f"/catalog/documents/{entry_id}/", prefix="Catalog document")

    async def find_folder(self, name: str, folder_type: str) -> Optional[Document]:
        folders = await self.request(
            "GET", "/folders/", prefix="Find folder", params={"name": name, "type": folder_type}
        )
        for folder in folders:
            if folder.get("name") == name and folder.get("type") == folder_type:
                return to_document(folder, "Folder")
        return None

    async def create_folder(self, name: str, folder_type: str) -> Document:
        resp_json = await self.request(
            "POST",
            "/folders/",
            prefix="Create folder",
            conflict_class=DuplicateFolder,
            json={"name": name, "type": folder_type},
        )
        return to_document(resp_json, "Folder")

    async def create_document(self, endpoint: str, document_type: str, data: dict) -> Document:
        resp_json = await self.request(
            "POST",
            endpoint,
            error_class=DocumentCreationFailure,
            prefix=f"Create {document_type}",
            json=data,
        )
        return to_document(resp_json, document_type)

    async def create_actor(self, data: dict) -> Document:
        return await self.create_document("/actors/", "Actor", data)

    async def create_journal(self, data: dict) -> Document:
        return await self.create_document("/journal/", "JournalEntry", data)

    async def create_token(self, data: dict) -> Document:
        return await self.create_document("/scenes/active/tokens/", "Token", data)

    async def create_note(self, data: dict) -> Document:
        return await self.create_document("/scenes/active/notes/", "Note", data)
