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

"""Errors raised by the drop pipeline and its stores."""


class DragUploadError(Exception):
    """Base for all errors of the drop pipeline."""


class InvalidViewport(DragUploadError):
    """Viewport transform is unavailable or degenerate. Aborts the whole batch."""


class ProvisioningFailure(DragUploadError):
    """Storage path or destination folder could not be provisioned. Aborts the whole batch."""


class UploadFailure(DragUploadError):
    """Asset upload of a single item failed."""


class DocumentCreationFailure(DragUploadError):
    """Document store rejected a single item's documents."""


class AlreadyExists(DragUploadError):
    """Raised by an asset store when a directory exists. Folded into success."""


class DuplicateFolder(DragUploadError):
    """Raised by a document store when a folder with the same name and type exists."""
