#!/usr/bin/env python3
"""Edit the liked/loved chapters of a catalog entry.

Loads a catalog document (or starts an empty one), selects or creates the
entry named by --title/--type, applies chapter additions and removals, and
prints a JSON report of the resulting chapter list. Nothing is written back
unless --write is given.

Usage:
    # Show the liked chapters of an entry
    python3 scripts/catalog_editor.py --catalog omm.json --title "Frieren"

    # Add a run of loved chapters, drop one, and save
    python3 scripts/catalog_editor.py --catalog omm.json --title "Frieren" \
      --type Manga --list loved --add "10 ~ 20" --remove 15 --write

    # Re-sort the whole catalog (also organizes every chapter list)
    python3 scripts/catalog_editor.py --catalog omm.json --sort --write
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

from omm.chapter_types import Err
from omm.entries import Catalog
from omm.entry import ChapterList, Entry
from omm.io_utils import CatalogFormatError, load_catalog, save_catalog

log = logging.getLogger("catalog_editor")


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def _add_edit(text: str) -> tuple[str, str]:
    return ("add", text)


def _remove_edit(text: str) -> tuple[str, str]:
    return ("remove", text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Edit the liked/loved chapters of a catalog entry."
    )
    parser.add_argument(
        "--catalog", required=True, type=Path,
        help="Path to the catalog JSON document (created if missing)",
    )
    parser.add_argument("--title", default=None, help="Entry title to select or create")
    parser.add_argument(
        "--type", dest="media_type", default="",
        help="Entry type (e.g. 'Manga'); narrows selection and is set on new entries",
    )
    parser.add_argument(
        "--list", dest="which", choices=("liked", "loved"), default="liked",
        help="Chapter list to edit (default: liked)",
    )
    # --add and --remove share one list so edits run in command-line order.
    parser.add_argument(
        "--add", dest="edits", action="append", type=_add_edit, metavar="CHAPTER",
        help="Chapter or range to add, e.g. '12.3' or '5 ~ 9'. Repeatable.",
    )
    parser.add_argument(
        "--remove", dest="edits", action="append", type=_remove_edit, metavar="CHAPTER",
        help="Chapter or range to remove. Repeatable.",
    )
    parser.set_defaults(edits=[])
    parser.add_argument(
        "--sort", action="store_true",
        help="Sort the catalog and organize every chapter list.",
    )
    parser.add_argument("--write", action="store_true", help="Save the catalog back.")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def open_catalog(path: Path) -> Catalog:
    if not path.exists():
        log.info("%s does not exist; starting an empty catalog", path)
        return Catalog()
    return load_catalog(path)


def select_entry(catalog: Catalog, title: str, media_type: str) -> Entry:
    entry = catalog.find(title, media_type)
    if entry is None:
        entry = Entry(title=title, media_type=media_type)
        catalog.add_entry(entry)
        log.info("created entry %r", title)
    return entry


def apply_edits(
    entry: Entry, which: ChapterList, edits: list[tuple[str, str]],
) -> list[dict[str, str]]:
    """Apply (op, chapter) edits in order; return the rejected tokens."""
    rejected: list[dict[str, str]] = []
    for op, text in edits:
        if op == "add":
            result = entry.add_chapter(text, which)
        else:
            result = entry.delete_chapter(text, which)
        if isinstance(result, Err):
            log.warning("%s %r rejected: %s", op, text, result.error.kind)
            rejected.append({
                "op": op,
                "chapter": text,
                "kind": result.error.kind,
                "detail": result.error.detail,
            })
    entry.organize_chapters()
    return rejected


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        catalog = open_catalog(args.catalog)
    except CatalogFormatError as exc:
        log.error("%s", exc)
        return 2

    report: dict[str, Any] = {"catalog_id": catalog.catalog_id}
    rejected: list[dict[str, str]] = []

    if args.title is not None:
        which: ChapterList = "loved" if args.which == "loved" else "liked"
        entry = select_entry(catalog, args.title, args.media_type)
        rejected = apply_edits(entry, which, args.edits)
        chapter_set = entry.chapters(which)
        report.update({
            "title": entry.title,
            "type": entry.media_type,
            "list": chapter_set.name,
            "chapters": chapter_set.serialize(),
            "rejected": rejected,
        })
    elif args.edits:
        log.error("--add/--remove need --title")
        return 2

    if args.sort:
        catalog.sort()
        report["order"] = [e.title for e in catalog]

    if args.write:
        save_catalog(catalog, args.catalog)
        log.info("wrote %d entries to %s", len(catalog), args.catalog)

    dump_json(report)
    return 1 if rejected else 0


if __name__ == "__main__":
    sys.exit(main())
