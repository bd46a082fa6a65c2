"""
Interval arithmetic over half-open time-of-day intervals.

Touching endpoints never count as overlap: a batch ending at 10:00 and one
starting at 10:00 can share a faculty.
"""
from __future__ import annotations

from typing import Iterable

from institute_shared.domain import Interval


def overlaps(a: Interval, b: Interval) -> bool:
    return a.start < b.end and b.start < a.end


def subtract(base: Interval, cut: Interval) -> list[Interval]:
    """
    Remove `cut` from `base` and return what is left, left to right.

    The result holds zero, one or two non-empty intervals.
    """
    if cut.end <= base.start or cut.start >= base.end:
        return [base]

    pieces: list[Interval] = []
    if cut.start > base.start:
        pieces.append(Interval(base.start, cut.start))
    if cut.end < base.end:
        pieces.append(Interval(cut.end, base.end))
    return pieces


def subtract_many(base: Interval, cuts: Iterable[Interval]) -> list[Interval]:
    """Apply each cut in turn to every piece that survived the previous cuts."""
    remaining = [] if base.is_empty else [base]
    for cut in cuts:
        if cut.is_empty:
            continue
        next_remaining: list[Interval] = []
        for piece in remaining:
            next_remaining.extend(subtract(piece, cut))
        remaining = next_remaining
        if not remaining:
            break
    return [piece for piece in remaining if not piece.is_empty]
