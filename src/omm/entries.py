"""Catalog of entries and the catalog sort order.

Sort policy:
  1. Entries in a franchise/series come first, grouped by franchise name
     (natural order) and ordered inside a group by their numeric
     franchise/series order, then by the default entry order.
  2. Entries without a franchise follow, in default entry order
     (natural title, then natural type).

Sorting also organizes every entry's chapter lists. Python's sort is
stable, so entries that tie on every key keep their previous order.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable, Iterator
from datetime import datetime

from omm.entry import Entry, entry_less
from omm.natural import natural_less

CATALOG_ID_PREFIX = "OMM_"

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_franchise_order(text: str) -> int | None:
    """Leading integer of a franchise order ("3", " 4th " -> 4); None if absent."""
    m = _LEADING_INT_RE.match(text)
    return int(m.group(1)) if m else None


def _entry_compare(left: Entry, right: Entry) -> int:
    if entry_less(left, right):
        return -1
    if entry_less(right, left):
        return 1
    return 0


def _franchise_compare(left: Entry, right: Entry) -> int:
    if left.franchise != right.franchise:
        return -1 if natural_less(left.franchise, right.franchise) else 1
    left_order = parse_franchise_order(left.franchise_order)
    right_order = parse_franchise_order(right.franchise_order)
    # Unnumbered entries go after the numbered ones of their franchise.
    left_rank = (left_order is None, left_order or 0)
    right_rank = (right_order is None, right_order or 0)
    if left_rank != right_rank:
        return -1 if left_rank < right_rank else 1
    return _entry_compare(left, right)


def sort_entries(entries: list[Entry]) -> None:
    """Reorder ``entries`` in place and organize their chapter lists."""
    in_franchise = [e for e in entries if e.franchise]
    standalone = [e for e in entries if not e.franchise]
    in_franchise.sort(key=functools.cmp_to_key(_franchise_compare))
    standalone.sort(key=functools.cmp_to_key(_entry_compare))
    entries[:] = in_franchise + standalone
    for entry in entries:
        entry.organize_chapters()


def new_catalog_id(now: datetime | None = None) -> str:
    """Catalog identifier: ``OMM_<date>_<time with milliseconds>``."""
    now = now or datetime.now()
    return f"{CATALOG_ID_PREFIX}{now:%Y-%m-%d_%H:%M:%S}.{now.microsecond // 1000:03d}"


class Catalog:
    """The ordered list of entries of one catalog document."""

    def __init__(self, catalog_id: str | None = None, entries: Iterable[Entry] = ()) -> None:
        self.catalog_id = catalog_id or new_catalog_id()
        self.entries: list[Entry] = list(entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def _index_of(self, entry: Entry) -> int | None:
        for index, existing in enumerate(self.entries):
            if existing.same_entry(entry):
                return index
        return None

    def find(self, title: str, media_type: str = "") -> Entry | None:
        """First entry with this title (and type, when one is given)."""
        for entry in self.entries:
            if entry.title == title and (not media_type or entry.media_type == media_type):
                return entry
        return None

    def add_entry(self, entry: Entry) -> None:
        self.entries.append(entry)

    def duplicate_entry(self, entry: Entry) -> Entry | None:
        """Insert a copy right after the matching entry; None if not found."""
        index = self._index_of(entry)
        if index is None:
            return None
        duplicate = self.entries[index].copy()
        self.entries.insert(index + 1, duplicate)
        return duplicate

    def delete_entry(self, entry: Entry) -> bool:
        index = self._index_of(entry)
        if index is None:
            return False
        del self.entries[index]
        return True

    def sort(self) -> None:
        sort_entries(self.entries)
