"""Catalog entry record.

An entry is a set of named string fields plus two chapter lists. The field
schema is fixed and ordered; keys that a catalog document carries beyond the
schema are kept verbatim in ``extra`` so that a load/save cycle loses
nothing.

JSON shape (one element of a catalog's "Entries" array)::

    {
        "Title": "Frieren", "Type": "Manga", "Franchise/Series": "",
        ...,
        "Liked Chapters": ["1 ~ 3", "12.5"],
        "Loved Chapters": ["7"]
    }
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Literal

from omm.chapter_types import ChapterParseError, ChapterRange, Result
from omm.chapters import ChapterSet
from omm.natural import natural_less

type ChapterList = Literal["liked", "loved"]

LIKED_KEY = "Liked Chapters"
LOVED_KEY = "Loved Chapters"

# (document key, attribute name), in document order.
ENTRY_FIELDS: tuple[tuple[str, str], ...] = (
    ("Title", "title"),
    ("Original Title", "original_title"),
    ("Franchise/Series", "franchise"),
    ("Franchise/Series Order", "franchise_order"),
    ("Author", "author"),
    ("Year", "year"),
    ("Type", "media_type"),
    ("Language", "language"),
    ("Rating", "rating"),
    ("Progress", "progress"),
    ("Notes", "notes"),
)

_FIELD_BY_KEY: dict[str, str] = dict(ENTRY_FIELDS)
_CHAPTER_KEYS = frozenset({LIKED_KEY, LOVED_KEY})


def _liked() -> ChapterSet:
    return ChapterSet(LIKED_KEY)


def _loved() -> ChapterSet:
    return ChapterSet(LOVED_KEY)


@dataclass(eq=False, slots=True)
class Entry:
    """One catalog record. Owns its liked and loved chapter lists."""

    title: str = ""
    original_title: str = ""
    franchise: str = ""
    franchise_order: str = ""
    author: str = ""
    year: str = ""
    media_type: str = ""
    language: str = ""
    rating: str = ""
    progress: str = ""
    notes: str = ""
    extra: dict[str, Any] = field(default_factory=dict[str, Any])
    liked: ChapterSet = field(default_factory=_liked)
    loved: ChapterSet = field(default_factory=_loved)

    def __repr__(self) -> str:
        return f"Entry(title={self.title!r}, media_type={self.media_type!r})"

    # -- identity ---------------------------------------------------------

    def identity_key(self) -> tuple[str, str, str, str]:
        """Fields that identify an entry within a catalog."""
        return (self.title, self.media_type, self.author, self.year)

    def same_entry(self, other: Entry) -> bool:
        return self.identity_key() == other.identity_key()

    # -- chapters ---------------------------------------------------------

    def chapters(self, which: ChapterList) -> ChapterSet:
        if which == "liked":
            return self.liked
        if which == "loved":
            return self.loved
        raise ValueError(f"unknown chapter list: {which!r}")

    def add_chapter(
        self, text: str, which: ChapterList,
    ) -> Result[ChapterRange, ChapterParseError]:
        return self.chapters(which).add(text)

    def delete_chapter(
        self, text: str, which: ChapterList,
    ) -> Result[ChapterRange, ChapterParseError]:
        return self.chapters(which).remove(text)

    def organize_chapters(self) -> None:
        self.liked.organize()
        self.loved.organize()

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        for key, attr in ENTRY_FIELDS:
            data[key] = getattr(self, attr)
        data[LIKED_KEY] = self.liked.serialize()
        data[LOVED_KEY] = self.loved.serialize()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Entry:
        """Build an entry from its document form.

        Schema fields are stringified; unknown keys keep their JSON values
        unchanged. Chapter strings that do not parse are dropped and both
        chapter lists come back organized.
        """
        entry = cls()
        for key, value in data.items():
            if key in _CHAPTER_KEYS:
                continue
            attr = _FIELD_BY_KEY.get(key)
            if attr is None:
                entry.extra[key] = value
            else:
                setattr(entry, attr, "" if value is None else str(value))
        entry.liked = ChapterSet.from_strings(LIKED_KEY, _string_list(data.get(LIKED_KEY)))
        entry.loved = ChapterSet.from_strings(LOVED_KEY, _string_list(data.get(LOVED_KEY)))
        return entry

    def copy(self) -> Entry:
        return copy.deepcopy(self)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    # bool is an int subclass; JSON true/false is not a chapter.
    return [
        str(v) for v in value
        if isinstance(v, str) or (isinstance(v, int) and not isinstance(v, bool))
    ]


def entry_less(left: Entry, right: Entry) -> bool:
    """Default entry order: natural title, then natural type."""
    if left.title != right.title:
        return natural_less(left.title, right.title)
    return natural_less(left.media_type, right.media_type)
