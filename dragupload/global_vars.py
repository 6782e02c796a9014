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

from logging import INFO, WARN
from os import environ


ADDON_ID = "dragupload"

STAGGER = 20
"""Per-item offset in world units, so items dropped together cascade diagonally."""

UPLOAD_SOURCES = {
    "data": "User Data",
    "s3": "S3 Storage",
    "forgevtt": "The Forge",
}
DEFAULT_UPLOAD_SOURCE = "data"

KIND_ACTOR = "actor"
KIND_NOTE = "journal"
KINDS = (KIND_ACTOR, KIND_NOTE)

FOLDER_TYPES = {
    KIND_ACTOR: "Actor",
    KIND_NOTE: "JournalEntry",
}
DEFAULT_FOLDER_NAMES = {
    KIND_ACTOR: "Drag Upload: Actors",
    KIND_NOTE: "Drag Upload: Handouts",
}

TOKEN_DISPLAY_NAME = 20  # owner hover
NOTE_ICON = "icons/svg/book.svg"
OWNERSHIP_OBSERVER = 2

LOGGING_LEVEL_DRAGUPLOAD = INFO
LOGGING_LEVEL_IMPORTED = WARN
TIMEOUT = 30

SERVER = environ.get("DRAGUPLOAD_SERVER", "http://localhost:30000")
PREFS = {}
