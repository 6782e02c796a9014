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

"""Catalog of known entry names and fuzzy matching of dropped file labels against it."""

from logging import getLogger
from typing import Iterable, Optional


logger = getLogger(__name__)


def build_catalog(names: Iterable[str]) -> tuple[str, ...]:
    """De-duplicated, case preserving, lexicographically sorted snapshot of names. Blank names are dropped."""
    return tuple(sorted({n for n in names if n and n.strip()}))


def find_best_match(label: str, catalog: Iterable[str]) -> Optional[str]:
    """Return the catalog name which best matches the label, or None.
    First hit wins:
    1. exact case-sensitive membership,
    2. case-insensitive equality,
    3. case-insensitive substring in either direction.
    Ties are broken by catalog order.
    """
    names = list(catalog)
    if label in names:
        return label

    target = label.lower().strip()
    if target == "":
        return None

    for name in names:
        if name.lower() == target:
            return name

    for name in names:
        lowered = name.lower().strip()
        if lowered == "":
            continue
        if target in lowered or lowered in target:
            return name
    return None


async def fetch_catalog(document_store) -> tuple[str, ...]:
    """Fetch the catalog index once and snapshot its names."""
    index = await document_store.get_catalog_index()
    catalog = build_catalog(entry.get("name", "") for entry in index)
    logger.info(f"Catalog snapshot holds {len(catalog)} names")
    return catalog


async def find_catalog_source(document_store, name: str) -> Optional[dict]:
    """Find full catalog document whose name equals `name` case-insensitively.
    Used as a base for newly created actors so they inherit the catalog entry's stats.
    Lookup failures are logged, the actor is then created without stats.
    """
    target = name.lower()
    try:
        index = await document_store.get_catalog_index()
        for entry in index:
            if entry.get("name", "").lower() != target:
                continue
            return await document_store.get_catalog_document(entry["_id"])
    except Exception as e:
        logger.warning(f"Catalog lookup for {name!r} failed: {e}")
    return None
