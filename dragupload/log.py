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

import logging
import re
import sys

from . import global_vars


SECRETS = set()
BEARER_RE = re.compile(r"(Bearer\s+)[^\s'\",}]+")


def register_secret(secret: str):
    """Mask this value in every log record from now on. Used for the configured API key."""
    if secret:
        SECRETS.add(secret)


def mask_tokens(msg: str) -> str:
    """Replace registered secrets and bearer tokens in Authorization headers with ***."""
    for secret in SECRETS:
        msg = msg.replace(secret, "***")
    return BEARER_RE.sub(r"\1***", msg)


class DragUploadFormatter(logging.Formatter):
    """Add emojis for logging level and mask API key tokens."""

    EMOJIS = {
        logging.DEBUG: "🐞",
        logging.INFO: "ℹ️ ",
        logging.WARNING: "⚠️ ",
        logging.ERROR: "❌",
        logging.CRITICAL: "🔥",
    }

    def format(self, record):
        record.levelname = self.EMOJIS.get(record.levelno, "")
        return mask_tokens(super().format(record))


class SensitiveFormatter(logging.Formatter):
    """Mask API key tokens, no emojis. Used for imported libraries."""

    def format(self, record):
        return mask_tokens(super().format(record))


def get_dragupload_formatter():
    return DragUploadFormatter(
        fmt="%(levelname)s dragupload: %(message)s [%(asctime)s.%(msecs)03d, %(filename)s:%(lineno)d]",
        datefmt="%H:%M:%S",
    )


def get_sensitive_formatter():
    return SensitiveFormatter(
        fmt="dragupload %(levelname)s: %(message)s [%(asctime)s.%(msecs)03d, %(filename)s:%(lineno)d]",
        datefmt="%H:%M:%S",
    )


def configure_dragupload_logger():
    """Configure 'dragupload' logger to which all other logs defined as `logger = logging.getLogger(__name__)` writes.
    Sets it logging level to `global_vars.LOGGING_LEVEL_DRAGUPLOAD`.
    """
    du_logger = logging.getLogger(__name__.removesuffix(".log"))
    du_logger.setLevel(global_vars.LOGGING_LEVEL_DRAGUPLOAD)
    du_logger.propagate = False
    du_logger.handlers = []

    stream_handler = logging.StreamHandler()
    stream_handler.stream = sys.stdout
    stream_handler.setFormatter(get_dragupload_formatter())
    du_logger.addHandler(stream_handler)


def configure_imported_loggers():
    """Configure aiohttp loggers so they can have different logging level `global_vars.LOGGING_LEVEL_IMPORTED`."""
    aiohttp_logger = logging.getLogger("aiohttp")
    aiohttp_logger.propagate = False
    aiohttp_logger.handlers = []

    aiohttp_handler = logging.StreamHandler()
    aiohttp_handler.stream = sys.stdout
    aiohttp_handler.setLevel(global_vars.LOGGING_LEVEL_IMPORTED)
    aiohttp_handler.setFormatter(get_sensitive_formatter())
    aiohttp_logger.addHandler(aiohttp_handler)


def configure_loggers():
    """Configure all loggers of the package. See called functions for details."""
    configure_dragupload_logger()
    configure_imported_loggers()
