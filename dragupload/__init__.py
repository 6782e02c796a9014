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

ADDON_INFO = {
    "name": "Drag Upload",
    "id": "dragupload",
    "version": (4, 7, 2),
    "description": "Drop images onto the canvas to upload them and create actors or handouts.",
}

__version__ = ".".join(str(v) for v in ADDON_INFO["version"])

from . import log


def register():
    """Configure logging. Call once before the first drop is handled."""
    log.configure_loggers()
