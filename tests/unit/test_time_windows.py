from __future__ import annotations

import datetime as dt

import pytest

from app.errors import ApiError
from app.utils.time_windows import (
    format_timestamp,
    parse_duration,
    parse_timestamp,
    resolve_window,
    window_predicates,
)
from core.query.predicates import Op

UTC = dt.timezone.utc
NEW_YEAR = dt.datetime(2022, 1, 1, tzinfo=UTC)


def test_parse_timestamp_accepts_unix_and_iso():
    assert parse_timestamp("1640995200") == NEW_YEAR
    assert parse_timestamp("2022-01-01T00:00:00") == NEW_YEAR
    assert parse_timestamp("2022-01-01T00:00:00Z") == NEW_YEAR
    assert parse_timestamp("2022-01-01T02:00:00+02:00") == NEW_YEAR


def test_parse_timestamp_echoes_bad_literal():
    with pytest.raises(ApiError) as ctx:
        parse_timestamp("not-a-date")
    assert ctx.value.status_code == 400
    assert ctx.value.errors == ["cannot parse time string: not-a-date"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2h30m", dt.timedelta(hours=2, minutes=30)),
        ("1day 3hours", dt.timedelta(days=1, hours=3)),
        ("90s", dt.timedelta(seconds=90)),
        ("1w", dt.timedelta(weeks=1)),
        ("15min", dt.timedelta(minutes=15)),
    ],
)
def test_parse_duration_expressions(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["soon", "2h x", "h2", "", "2 parsecs"])
def test_parse_duration_rejects_garbage(text):
    with pytest.raises(ApiError) as ctx:
        parse_duration(text)
    assert ctx.value.status_code == 400
    assert f"cannot parse time duration string: {text}" in ctx.value.errors[0]


def test_start_plus_duration_derives_end():
    window = resolve_window("2022-01-01T00:00:00", None, "2h")
    assert window.start == NEW_YEAR
    assert window.end == NEW_YEAR + dt.timedelta(hours=2)


def test_end_minus_duration_derives_start():
    window = resolve_window(None, "2022-01-01T00:00:00", "1d")
    assert window.end == NEW_YEAR
    assert window.start == NEW_YEAR - dt.timedelta(days=1)


def test_duration_ignored_when_both_bounds_given():
    window = resolve_window("2022-01-01T00:00:00", "2022-01-01T00:30:00", "5d")
    assert window.end - window.start == dt.timedelta(minutes=30)


def test_duration_ignored_without_bounds():
    assert resolve_window(None, None, "2h") is None


def test_single_bound_without_duration_stays_open():
    window = resolve_window("1640995200", None)
    assert window.start == NEW_YEAR
    assert window.end is None


def test_decomposed_duration_fields_are_summed():
    window = resolve_window(
        "2022-01-01T00:00:00", None, duration_days=1, duration_hours=2, duration_minutes=3
    )
    assert window.end - window.start == dt.timedelta(days=1, hours=2, minutes=3)


def test_duration_expression_wins_over_fields():
    window = resolve_window("2022-01-01T00:00:00", None, "1h", duration_days=3)
    assert window.end - window.start == dt.timedelta(hours=1)


def test_inverted_window_is_rejected():
    with pytest.raises(ApiError) as ctx:
        resolve_window("2022-01-02T00:00:00", "2022-01-01T00:00:00")
    assert ctx.value.status_code == 400


def test_window_predicates_select_overlapping_records():
    window = resolve_window("2022-01-01T00:00:00", "2022-01-01T01:00:00")
    predicates = window_predicates(window)
    assert [(p.field, p.op, p.value) for p in predicates] == [
        ("ts_start", Op.LTE, "2022-01-01T01:00:00"),
        ("ts_end", Op.GTE, "2022-01-01T00:00:00"),
    ]
    assert window_predicates(None) == []


def test_format_timestamp_converts_to_utc():
    eastern = dt.datetime(2022, 1, 1, 7, 0, tzinfo=dt.timezone(dt.timedelta(hours=7)))
    assert format_timestamp(eastern) == "2022-01-01T00:00:00"


def test_format_timestamp_pads_early_years():
    assert format_timestamp(dt.datetime(999, 1, 1, tzinfo=UTC)) == "0999-01-01T00:00:00"
    assert format_timestamp(dt.datetime(2022, 1, 1, 0, 0, 5, 123456, tzinfo=UTC)) == "2022-01-01T00:00:05"


def test_oversized_duration_is_bad_request():
    with pytest.raises(ApiError) as ctx:
        parse_duration("99999999999y")
    assert ctx.value.status_code == 400
    assert ctx.value.errors == ["time duration out of range: 99999999999y"]


def test_derived_bound_past_calendar_is_bad_request():
    with pytest.raises(ApiError) as ctx:
        resolve_window("9999-12-31T00:00:00", None, "2d")
    assert ctx.value.status_code == 400
    assert ctx.value.errors == ["time window out of range: 9999-12-31T00:00:00 with duration 2d"]
    with pytest.raises(ApiError):
        resolve_window(None, "0001-01-01T00:00:00", "1d")
