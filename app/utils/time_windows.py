"""Chronological utilities for resolving time-windowed queries.

Windowed endpoints receive any combination of a start, an end and a duration.
This module turns that input into a deterministic, timezone-aware TimeWindow
and then into the overlap predicates sent to the store.  Unlike the permissive
vocabulary fields, time input has no sensible fallback: a value that cannot be
interpreted fails the request with the offending literal in the message.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import List, Optional

from app.errors import ApiError
from core.query.predicates import Predicate, gte, lte

# Unit spellings accepted in duration expressions such as "2h30m" or "1day 3hours".
# Months and years use the average Gregorian lengths.
_DURATION_UNITS = {
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
    "M": 2630016,
    "month": 2630016,
    "months": 2630016,
    "y": 31557600,
    "year": 31557600,
    "years": 31557600,
}
_DURATION_TERM = re.compile(r"\s*(\d+)\s*([A-Za-z]+)")


def _ensure_timezone(value: dt.datetime) -> dt.datetime:
    """Normalise a datetime object so that it is explicitly expressed in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def parse_timestamp(text: str) -> dt.datetime:
    """Parse a Unix timestamp or an ISO-8601 date-time into a UTC datetime."""
    raw = text.strip()
    if re.fullmatch(r"-?\d+", raw):
        try:
            return dt.datetime.fromtimestamp(int(raw), tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ApiError.bad_request(f"cannot parse time string: {text}") from None
    try:
        parsed = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ApiError.bad_request(f"cannot parse time string: {text}") from None
    try:
        return _ensure_timezone(parsed)
    except OverflowError:
        raise ApiError.bad_request(f"cannot parse time string: {text}") from None


def parse_duration(text: str) -> dt.timedelta:
    """Parse a human-readable duration like ``2h30m``, ``1day 3hours`` or ``90s``."""
    raw = text.strip()
    pos = 0
    seconds = 0
    for match in _DURATION_TERM.finditer(raw):
        unit = _DURATION_UNITS.get(match.group(2)) or _DURATION_UNITS.get(match.group(2).lower())
        if match.start() != pos or unit is None:
            raise ApiError.bad_request(f"cannot parse time duration string: {text}")
        seconds += int(match.group(1)) * unit
        pos = match.end()
    if pos == 0 or raw[pos:].strip():
        raise ApiError.bad_request(f"cannot parse time duration string: {text}")
    try:
        return dt.timedelta(seconds=seconds)
    except OverflowError:
        raise ApiError.bad_request(f"time duration out of range: {text}") from None


def duration_from_parts(
    days: Optional[int] = None,
    hours: Optional[int] = None,
    minutes: Optional[int] = None,
) -> Optional[dt.timedelta]:
    """Combine the decomposed day/hour/minute fields; None when none are given."""
    if days is None and hours is None and minutes is None:
        return None
    try:
        return dt.timedelta(days=days or 0, hours=hours or 0, minutes=minutes or 0)
    except OverflowError:
        raise ApiError.bad_request(
            f"time duration out of range: days={days}, hours={hours}, minutes={minutes}"
        ) from None


def format_timestamp(value: dt.datetime) -> str:
    """Render a UTC instant as ``YYYY-MM-DDTHH:MM:SS`` with a four-digit year."""
    return _ensure_timezone(value).replace(tzinfo=None).isoformat(timespec="seconds")


@dataclass(frozen=True)
class TimeWindow:
    """Requested window; either bound may be open."""

    start: Optional[dt.datetime]
    end: Optional[dt.datetime]


def resolve_window(
    ts_start: Optional[str],
    ts_end: Optional[str],
    duration: Optional[str] = None,
    *,
    duration_days: Optional[int] = None,
    duration_hours: Optional[int] = None,
    duration_minutes: Optional[int] = None,
) -> Optional[TimeWindow]:
    """Derive the (start, end) window from any two of start, end and duration.

    Returns None when no bound was supplied.  A single bound plus a duration
    yields the missing bound; with both bounds the duration is ignored.
    """
    end = parse_timestamp(ts_end) if ts_end is not None else None
    start = parse_timestamp(ts_start) if ts_start is not None else None

    if (start is None) != (end is None):
        if duration is not None:
            span: Optional[dt.timedelta] = parse_duration(duration)
        else:
            span = duration_from_parts(duration_days, duration_hours, duration_minutes)
        if span is not None:
            try:
                if start is not None:
                    end = start + span
                else:
                    start = end - span
            except OverflowError:
                bound = ts_start if start is not None else ts_end
                label = duration if duration is not None else span
                raise ApiError.bad_request(f"time window out of range: {bound} with duration {label}") from None

    if start is None and end is None:
        return None
    if start is not None and end is not None and start > end:
        raise ApiError.bad_request(
            f"time window start {format_timestamp(start)} is after end {format_timestamp(end)}"
        )
    return TimeWindow(start=start, end=end)


def window_predicates(
    window: Optional[TimeWindow],
    start_column: str = "ts_start",
    end_column: str = "ts_end",
) -> List[Predicate]:
    """Return predicates selecting records whose own interval overlaps the window."""
    if window is None:
        return []
    predicates: List[Predicate] = []
    if window.end is not None:
        predicates.append(lte(start_column, format_timestamp(window.end)))
    if window.start is not None:
        predicates.append(gte(end_column, format_timestamp(window.start)))
    return predicates
