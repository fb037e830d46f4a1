"""Core types for the chapter engine.

Every chapter operation shares these types. Chapter identifiers are plain
integer tuples so that Python's tuple ordering is the chapter ordering
(element-wise, a proper prefix sorts first).

Type hierarchy:
  ChapterID          - Hierarchical chapter position, e.g. (12, 3) for "12.3"
  Ok[T] / Err[E]     - Strict algebraic Result type
  ChapterParseError  - Typed failure for chapter text that cannot be used
  ChapterRange       - One chapter or a run of chapters at the deepest level
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


type ChapterID = tuple[int, ...]
type ParseErrorKind = Literal[
    "conversion_failure", "different_depth", "multi_section", "depth_mismatch",
]


# ---------------------------------------------------------------------------
# Result ADT: strict Ok/Err, NOT tuple hack
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success case of Result[T, E].

    Usage::

        result: Result[ChapterRange, ChapterParseError] = parse_chapter("5 ~ 7")
        match result:
            case Ok(value=r): print(r.low, r.high)
            case Err(error=e): print(e.kind)
    """
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure case of Result[T, E].

    Carries the typed reason so callers can report why a token was discarded.
    """
    error: E


type Result[T, E] = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Parse failures
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ChapterParseError:
    """Typed failure for chapter text. The attempted text is always ignored."""
    kind: ParseErrorKind
    text: str
    detail: str = ""


# ---------------------------------------------------------------------------
# ChapterRange - a single chapter or a depth-preserving run
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True, order=True)
class ChapterRange:
    """A chapter (``low == high``) or a contiguous run of chapters.

    Ranges only span the deepest level: "5.1 ~ 5.4" is a range, "5.1 ~ 6.2"
    is not. Ordering is by ``(low, high)``.

    Invariants (enforced in __post_init__):
        - low and high are non-empty and have the same depth
        - every component is non-negative
        - low and high differ at most in the last component
        - low <= high
    """
    low: ChapterID
    high: ChapterID

    def __post_init__(self) -> None:
        if not self.low or len(self.low) != len(self.high):
            raise ValueError(
                f"ChapterRange endpoints must be non-empty with equal depth, "
                f"got {self.low!r} and {self.high!r}"
            )
        if min(self.low) < 0 or min(self.high) < 0:
            raise ValueError(
                f"ChapterRange components must be >= 0, got {self.low!r} ~ {self.high!r}"
            )
        if self.low[:-1] != self.high[:-1]:
            raise ValueError(
                f"ChapterRange may only span the last component, "
                f"got {self.low!r} ~ {self.high!r}"
            )
        if self.low > self.high:
            raise ValueError(
                f"ChapterRange.low ({self.low!r}) must be <= high ({self.high!r})"
            )

    @classmethod
    def single(cls, chapter: ChapterID) -> ChapterRange:
        return cls(chapter, chapter)

    @property
    def depth(self) -> int:
        return len(self.low)

    @property
    def is_single(self) -> bool:
        return self.low == self.high

    def covers(self, chapter: ChapterID) -> bool:
        """True if ``chapter`` lies on this range's level and inside it."""
        return (
            len(chapter) == self.depth
            and chapter[:-1] == self.low[:-1]
            and self.low[-1] <= chapter[-1] <= self.high[-1]
        )
