"""Chapter parsing and the liked/loved chapter lists.

Chapter text grammar::

    chapter := number ('.' number)*
    range   := chapter '~' chapter

Whitespace around endpoints is ignored, so both "5~7" and the canonical
"5 ~ 7" parse; inside an endpoint it is not ("5 . 1" fails). A reversed
range ("7 ~ 5") is swapped, not rejected. Malformed text never raises:
``parse_chapter`` returns an ``Err`` carrying a ``ChapterParseError`` and
list mutations become no-ops.

A ChapterSet is kept normalized by ``organize()``: sorted by (low, high),
pairwise non-overlapping, with consecutive runs on the same level joined
("5", "6", "7" become "5 ~ 7"). ``add``/``remove`` only reshape the first
overlapping range, so a set built by many adds may need ``organize()``
before it is normalized again.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from omm.chapter_types import (
    ChapterID,
    ChapterParseError,
    ChapterRange,
    Err,
    Ok,
    ParseErrorKind,
    Result,
)

log = logging.getLogger(__name__)

# Upper bound of the 32-bit signed conversion the catalog format was written
# with; larger values are treated as conversion failures.
MAX_COMPONENT = 2**31 - 1

RANGE_SEPARATOR = "~"
COMPONENT_SEPARATOR = "."

_NUMBER_RE = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------------
# Parsing and formatting
# ---------------------------------------------------------------------------

def _fail(kind: ParseErrorKind, text: str, detail: str) -> Err[ChapterParseError]:
    return Err(ChapterParseError(kind=kind, text=text, detail=detail))


def _parse_components(part: str) -> list[int] | None:
    """Parse "12.3" into [12, 3]; None on any empty or non-numeric field."""
    components: list[int] = []
    for field in part.split(COMPONENT_SEPARATOR):
        if not _NUMBER_RE.fullmatch(field):
            return None
        value = int(field)
        if value > MAX_COMPONENT:
            return None
        components.append(value)
    return components


def parse_chapter(text: str) -> Result[ChapterRange, ChapterParseError]:
    """Parse chapter text into a ChapterRange.

    Failure kinds:
      conversion_failure - a field is empty, non-numeric or too large
      different_depth    - "1.2 ~ 3" (endpoints of unequal depth)
      multi_section      - "5.1 ~ 6.2" (range spans more than the last level)
    """
    parts = text.split(RANGE_SEPARATOR)
    if len(parts) > 2:
        return _fail("conversion_failure", text, "more than one range separator")

    endpoints: list[ChapterID] = []
    for part in (p.strip() for p in parts):
        components = _parse_components(part)
        if components is None:
            return _fail("conversion_failure", text, f"not a chapter number: {part!r}")
        endpoints.append(tuple(components))

    low = endpoints[0]
    high = endpoints[-1]
    if len(low) != len(high):
        return _fail(
            "different_depth", text,
            f"endpoints have {len(low)} and {len(high)} components",
        )
    if low[:-1] != high[:-1]:
        return _fail("multi_section", text, "range may only span the last component")
    if low > high:
        low, high = high, low
    return Ok(ChapterRange(low, high))


def format_chapter_id(chapter: ChapterID) -> str:
    return COMPONENT_SEPARATOR.join(str(c) for c in chapter)


def format_chapter(chapter_range: ChapterRange) -> str:
    """Canonical text: "5.1" for a single chapter, "5.1 ~ 5.4" for a run."""
    low = format_chapter_id(chapter_range.low)
    if chapter_range.is_single:
        return low
    return f"{low} {RANGE_SEPARATOR} {format_chapter_id(chapter_range.high)}"


def overlaps(a: ChapterRange, b: ChapterRange) -> bool:
    """True if the two ranges share at least one point (symmetric)."""
    return a.low <= b.high and b.low <= a.high


def touches(a: ChapterRange, b: ChapterRange) -> bool:
    """True if ``b`` starts right after ``a`` ends on the same level."""
    return (
        a.depth == b.depth
        and a.high[:-1] == b.low[:-1]
        and a.high[-1] + 1 == b.low[-1]
    )


def _shift_last(chapter: ChapterID, delta: int) -> ChapterID:
    return chapter[:-1] + (chapter[-1] + delta,)


# ---------------------------------------------------------------------------
# ChapterSet
# ---------------------------------------------------------------------------

class ChapterSet:
    """A named list of chapter ranges, e.g. the liked chapters of one entry.

    The set owns its ranges. ChapterRange values are immutable, so reshaping
    a range replaces the list slot instead of editing it in place.
    """

    __slots__ = ("name", "_ranges")

    def __init__(self, name: str, ranges: Iterable[ChapterRange] = ()) -> None:
        self.name = name
        self._ranges: list[ChapterRange] = list(ranges)

    @classmethod
    def from_strings(cls, name: str, texts: Iterable[str]) -> ChapterSet:
        """Rebuild a set from persisted chapter strings.

        Unusable strings are dropped; the result is organized.
        """
        chapter_set = cls(name)
        for text in texts:
            chapter_set.add(text)
        chapter_set.organize()
        return chapter_set

    # -- read access ------------------------------------------------------

    @property
    def ranges(self) -> tuple[ChapterRange, ...]:
        return tuple(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[ChapterRange]:
        return iter(self._ranges)

    def __repr__(self) -> str:
        return f"ChapterSet({self.name!r}, {self.serialize()!r})"

    def covers(self, chapter: ChapterID) -> bool:
        return any(r.covers(chapter) for r in self._ranges)

    def is_organized(self) -> bool:
        """True if sorted by (low, high) with no overlapping or touching neighbours."""
        return all(
            a <= b and not overlaps(a, b) and not touches(a, b)
            for a, b in zip(self._ranges, self._ranges[1:])
        )

    def serialize(self) -> list[str]:
        return [format_chapter(r) for r in self._ranges]

    # -- mutation ---------------------------------------------------------

    def _first_overlap(self, chapter_range: ChapterRange) -> int | None:
        for index, existing in enumerate(self._ranges):
            if overlaps(existing, chapter_range):
                return index
        return None

    def _merge(
        self, index: int, other: ChapterRange, other_index: int | None = None,
    ) -> None:
        """Grow the range at ``index`` to span ``other``.

        When ``other`` is itself a member (at ``other_index``) it is dropped.
        Caller must have established that the two ranges overlap or touch.
        """
        current = self._ranges[index]
        self._ranges[index] = ChapterRange(
            min(current.low, other.low), max(current.high, other.high),
        )
        if other_index is not None:
            del self._ranges[other_index]

    def _split(self, index: int, pivot: ChapterRange) -> None:
        """Cut the points of ``pivot`` out of the range at ``index``.

        Caller must have established overlap and equal depth. Up to two
        remainders survive: the part before the pivot and the part after it.
        """
        container = self._ranges[index]
        remainders: list[ChapterRange] = []
        if container.low < pivot.low:
            remainders.append(ChapterRange(container.low, _shift_last(pivot.low, -1)))
        if pivot.high < container.high:
            remainders.append(ChapterRange(_shift_last(pivot.high, 1), container.high))
        self._ranges[index:index + 1] = remainders

    def add(self, text: str) -> Result[ChapterRange, ChapterParseError]:
        """Add chapter text, merging into the first overlapping range.

        Non-overlapping chapters are appended unsorted; call ``organize()``
        after bulk changes.
        """
        result = parse_chapter(text)
        match result:
            case Err(error=error):
                log.debug("%s: ignoring %r (%s)", self.name, text, error.kind)
                return result
            case Ok(value=chapter_range):
                index = self._first_overlap(chapter_range)
                if index is None:
                    self._ranges.append(chapter_range)
                else:
                    self._merge(index, chapter_range)
                return result

    def remove(self, text: str) -> Result[ChapterRange, ChapterParseError]:
        """Remove chapter text from the first range it overlaps.

        Removing chapters that are not present is a no-op. A pivot whose
        depth differs from the overlapping range is rejected with
        ``depth_mismatch`` and nothing changes.
        """
        result = parse_chapter(text)
        match result:
            case Err(error=error):
                log.debug("%s: ignoring removal of %r (%s)", self.name, text, error.kind)
                return result
            case Ok(value=pivot):
                index = self._first_overlap(pivot)
                if index is None:
                    return result
                container = self._ranges[index]
                if container.depth != pivot.depth:
                    log.debug(
                        "%s: cannot remove %r from %r (depth %d vs %d)",
                        self.name, text, format_chapter(container),
                        pivot.depth, container.depth,
                    )
                    return _fail(
                        "depth_mismatch", text,
                        f"overlaps {format_chapter(container)!r} at a different depth",
                    )
                self._split(index, pivot)
                return result

    def organize(self) -> None:
        """Sort the ranges and merge overlapping or touching neighbours.

        A merge can make the grown range reach the next one, so the same
        position is checked again before moving on.
        """
        self._ranges.sort()
        index = 0
        while index < len(self._ranges) - 1:
            current, following = self._ranges[index], self._ranges[index + 1]
            if overlaps(current, following) or touches(current, following):
                self._merge(index, following, index + 1)
            else:
                index += 1

    def clear(self) -> None:
        self._ranges.clear()
