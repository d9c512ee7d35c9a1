"""Normalisation of ROA validity intervals.

The history store keeps each ROA's validity as a list of PostgreSQL
``daterange`` literals such as ``[2022-01-01,2022-01-05)``.  The helpers below
turn them into closed calendar-day intervals, bridge the single-day gaps left
by missed daily snapshots, and decide whether the ROA is still current.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

ONE_DAY = dt.timedelta(days=1)
# Two consecutive intervals separated by exactly one missing day.
GAP_SPAN = dt.timedelta(days=2)

DateRange = Tuple[dt.date, dt.date]


@dataclass(frozen=True)
class RawInterval:
    """One interval endpoint pair plus its inclusivity markers."""

    start: dt.date
    end: dt.date
    start_exclusive: bool = False
    end_exclusive: bool = False

    def closed(self) -> DateRange:
        """Return the interval with both endpoints made inclusive."""
        start = self.start + ONE_DAY if self.start_exclusive else self.start
        end = self.end - ONE_DAY if self.end_exclusive else self.end
        return start, end


@dataclass
class NormalizedIntervals:
    ranges: List[DateRange]
    current: bool

    def as_strings(self) -> List[List[str]]:
        return [[start.isoformat(), end.isoformat()] for start, end in self.ranges]


def parse_range_literal(text: str) -> Optional[RawInterval]:
    """Parse ``[2022-01-01,2022-01-05)``; returns None for the ``empty`` range.

    Unbounded endpoints are read as ``date.min`` / ``date.max`` (an unbounded
    upper bound is an interval that is still ongoing).
    """
    literal = text.strip()
    if literal.lower() == "empty":
        return None
    if len(literal) < 3 or literal[0] not in "[(" or literal[-1] not in "])":
        raise ValueError(f"malformed date range: {text!r}")
    body = literal[1:-1].split(",")
    if len(body) != 2:
        raise ValueError(f"malformed date range: {text!r}")
    lower, upper = (part.strip().strip('"') for part in body)
    start = dt.date.fromisoformat(lower) if lower else dt.date.min
    end = dt.date.fromisoformat(upper) if upper else dt.date.max
    return RawInterval(
        start=start,
        end=end,
        # An unbounded side has nothing to shift.
        start_exclusive=literal[0] == "(" and bool(lower),
        end_exclusive=literal[-1] == ")" and bool(upper),
    )


def parse_range_literals(literals: Iterable[str]) -> List[RawInterval]:
    intervals = []
    for literal in literals:
        parsed = parse_range_literal(literal)
        if parsed is not None:
            intervals.append(parsed)
    return intervals


def merge_single_day_gaps(ranges: Sequence[DateRange]) -> List[DateRange]:
    """Join consecutive intervals separated by exactly one missing day.

    Intervals are walked in the order given; they are assumed chronological
    and are not sorted here.
    """
    if not ranges:
        return []
    merged: List[DateRange] = []
    cur_start, cur_end = ranges[0]
    for start, end in ranges[1:]:
        if start - cur_end == GAP_SPAN:
            cur_end = end
        else:
            merged.append((cur_start, cur_end))
            cur_start, cur_end = start, end
    merged.append((cur_start, cur_end))
    return merged


def normalize_intervals(
    raw: Sequence[RawInterval],
    fix_gaps: bool = True,
    today: Optional[dt.date] = None,
) -> NormalizedIntervals:
    """Close, optionally gap-merge, and flag an ROA's validity intervals.

    The ROA is current when any interval ends on or after yesterday (UTC).
    Empty input yields no ranges and ``current=False``.
    """
    today = today or dt.datetime.now(dt.timezone.utc).date()
    cutoff = today - ONE_DAY
    closed = [interval.closed() for interval in raw]
    current = any(end >= cutoff for _, end in closed)
    ranges = merge_single_day_gaps(closed) if fix_gaps else closed
    return NormalizedIntervals(ranges=ranges, current=current)
