"""Natural ("alphanumeric") string ordering and small text helpers.

Strings are compared run by run, where a run is a maximal stretch of digits
or of non-digits. Digit runs with different integer values compare by value,
so "item2" sorts before "item10". Everything else compares exactly as plain
string comparison would: no case folding, no punctuation stripping.
"""

from __future__ import annotations

import functools
import re

_RUN_RE = re.compile(r"[0-9]+|[^0-9]+")

# Whitespace stripped by trim(): space, form feed, newline, CR, tab, VT.
_TRIM_CHARS = " \f\n\r\t\v"


def is_number(text: str, index: int = 0) -> bool:
    """True if ``text`` has an ASCII digit at ``index``."""
    return 0 <= index < len(text) and text[index] in "0123456789"


def trim(text: str) -> str:
    return text.strip(_TRIM_CHARS)


def natural_less(left: str, right: str) -> bool:
    """True if ``left`` sorts before ``right`` in natural order.

    >>> natural_less("item2", "item10")
    True
    >>> natural_less("v10.2", "v2.10")
    False
    """
    if not left or not right:
        return left < right

    left_runs = _RUN_RE.findall(left)
    right_runs = _RUN_RE.findall(right)
    for left_run, right_run in zip(left_runs, right_runs):
        if left_run == right_run:
            continue
        if is_number(left_run) and is_number(right_run):
            left_value, right_value = int(left_run), int(right_run)
            if left_value != right_value:
                return left_value < right_value
        return left_run < right_run

    # Every compared run matched: the side that ran out first is less.
    return len(left_runs) < len(right_runs)


def natural_compare(left: str, right: str) -> int:
    """Three-way natural comparison: -1, 0 or 1."""
    if natural_less(left, right):
        return -1
    if natural_less(right, left):
        return 1
    return 0


natural_key = functools.cmp_to_key(natural_compare)
