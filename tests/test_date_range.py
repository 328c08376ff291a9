from datetime import date

import pytest

from daily_report.services.date_range import DatePreset, get_date_range, resolve_period

WEDNESDAY = date(2025, 12, 3)


def test_all_has_no_bounds():
    assert get_date_range("all", today=WEDNESDAY) == (None, None)


def test_today():
    assert get_date_range(DatePreset.TODAY, today=WEDNESDAY) == (WEDNESDAY, WEDNESDAY)


def test_week_runs_monday_to_sunday():
    assert get_date_range("week", today=WEDNESDAY) == (date(2025, 12, 1), date(2025, 12, 7))


def test_week_on_sunday_goes_back_to_monday():
    assert get_date_range("week", today=date(2025, 12, 7)) == (date(2025, 12, 1), date(2025, 12, 7))


def test_month_handles_leap_february():
    assert get_date_range("month", today=date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2025, 1, 15), (date(2025, 1, 1), date(2025, 3, 31))),
        (date(2025, 5, 2), (date(2025, 4, 1), date(2025, 6, 30))),
        (date(2025, 9, 30), (date(2025, 7, 1), date(2025, 9, 30))),
        (date(2025, 11, 15), (date(2025, 10, 1), date(2025, 12, 31))),
    ],
)
def test_quarter_follows_calendar_quarters(today, expected):
    assert get_date_range("quarter", today=today) == expected


def test_custom_passes_bounds_through():
    start, end = date(2025, 12, 1), date(2025, 12, 31)
    assert get_date_range("custom", start, end) == (start, end)
    assert get_date_range("custom", start, None) == (start, None)
    assert get_date_range("custom") == (None, None)


def test_unknown_preset_is_rejected():
    with pytest.raises(ValueError):
        get_date_range("fortnight")


def test_resolve_period_uses_explicit_bounds_without_preset():
    start, end = date(2025, 1, 1), date(2025, 1, 31)
    assert resolve_period(None, start, end) == (start, end)


def test_resolve_period_preset_overrides_explicit_bounds():
    assert resolve_period("today", date(2020, 1, 1), None, today=WEDNESDAY) == (WEDNESDAY, WEDNESDAY)
