"""I/O utilities for catalog documents.

orjson-backed JSON load/save plus the catalog document mapping::

    {"_id": "OMM_2026-10-17_11:37:02.315", "Entries": [{...}, ...]}

The chapter engine itself never touches files; this module is the
persistence side that feeds it strings and takes its serialized lists back.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import orjson

from omm.entries import Catalog
from omm.entry import Entry

log = logging.getLogger(__name__)

ID_KEY = "_id"
ENTRIES_KEY = "Entries"
_ID_MARKER = "OMM"


class CatalogFormatError(ValueError):
    """Raised when a file is not a catalog document."""


def load_json(path: Path) -> Any:
    """Load JSON from a file using orjson."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON using orjson, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))


def catalog_to_dict(catalog: Catalog) -> dict[str, Any]:
    return {
        ID_KEY: catalog.catalog_id,
        ENTRIES_KEY: [entry.to_dict() for entry in catalog],
    }


def catalog_from_dict(data: Any) -> Catalog:
    """Rebuild a catalog from its document form.

    Raises CatalogFormatError when the id does not mark a catalog or the
    entries are not a list of objects.
    """
    if not isinstance(data, dict):
        raise CatalogFormatError(f"catalog document must be an object, got {type(data).__name__}")
    doc = cast(dict[str, Any], data)
    catalog_id = doc.get(ID_KEY)
    if not isinstance(catalog_id, str) or not catalog_id.startswith(_ID_MARKER):
        raise CatalogFormatError(f"not a catalog document (id={catalog_id!r})")
    raw_entries = doc.get(ENTRIES_KEY, [])
    if not isinstance(raw_entries, list):
        raise CatalogFormatError(f"{ENTRIES_KEY!r} must be a list")

    entries: list[Entry] = []
    for position, raw in enumerate(cast(list[Any], raw_entries)):
        if not isinstance(raw, dict):
            raise CatalogFormatError(f"entry {position} must be an object")
        entries.append(Entry.from_dict(cast(dict[str, Any], raw)))
    log.debug("loaded catalog %s with %d entries", catalog_id, len(entries))
    return Catalog(catalog_id, entries)


def load_catalog(path: Path) -> Catalog:
    try:
        data = load_json(path)
    except orjson.JSONDecodeError as exc:
        raise CatalogFormatError(f"{path}: invalid JSON ({exc})") from exc
    return catalog_from_dict(data)


def save_catalog(catalog: Catalog, path: Path) -> None:
    save_json(catalog_to_dict(catalog), path)
    log.debug("saved catalog %s (%d entries) to %s", catalog.catalog_id, len(catalog), path)
