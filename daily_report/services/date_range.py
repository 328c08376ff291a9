# daily_report/services/date_range.py
import calendar
from datetime import date, timedelta
from enum import Enum


class DatePreset(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    CUSTOM = "custom"


def _last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def get_date_range(
    preset: DatePreset | str,
    custom_start: date | None = None,
    custom_end: date | None = None,
    today: date | None = None,
) -> tuple[date | None, date | None]:
    """
    Resolves a period preset into an inclusive (start, end) pair of dates.

    ``all`` means no bound at all. ``week`` runs Monday to Sunday, ``quarter``
    follows calendar quarters (Jan-Mar, Apr-Jun, Jul-Sep, Oct-Dec). ``custom``
    passes the given bounds through, either of which may be missing.
    """
    preset = DatePreset(preset)
    today = today or date.today()

    if preset is DatePreset.ALL:
        return None, None

    if preset is DatePreset.TODAY:
        return today, today

    if preset is DatePreset.WEEK:
        monday = today - timedelta(days=today.weekday())
        return monday, monday + timedelta(days=6)

    if preset is DatePreset.MONTH:
        return today.replace(day=1), _last_day_of_month(today.year, today.month)

    if preset is DatePreset.QUARTER:
        first_month = (today.month - 1) // 3 * 3 + 1
        return date(today.year, first_month, 1), _last_day_of_month(today.year, first_month + 2)

    return custom_start or None, custom_end or None


def resolve_period(
    preset: DatePreset | str | None,
    start_date: date | None = None,
    end_date: date | None = None,
    today: date | None = None,
) -> tuple[date | None, date | None]:
    """Explicit bounds apply unless a preset is chosen; ``custom`` reuses them."""
    if preset is None:
        return start_date, end_date
    return get_date_range(preset, start_date, end_date, today=today)
