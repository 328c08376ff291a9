# daily_report/services/report_query.py
# Keyword search, project filter and sorting over already-loaded reports.
from enum import Enum
from typing import Iterable, List

from daily_report.db.models import DailyReport


class SortOption(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    UPDATED_DESC = "updated-desc"
    UPDATED_ASC = "updated-asc"
    HOURS_DESC = "hours-desc"
    HOURS_ASC = "hours-asc"


_REPORT_TEXT_FIELDS = ("daily_goal", "improvements", "happy_moments", "future_tasks")
_ACTIVITY_TEXT_FIELDS = ("project_category", "content", "issues")


def matches_keyword(report: DailyReport, keyword: str | None) -> bool:
    """ Case-insensitive substring match over the report's and its activities' text. """
    needle = (keyword or "").strip().lower()
    if not needle:
        return True

    if any(needle in (getattr(report, field) or "").lower() for field in _REPORT_TEXT_FIELDS):
        return True

    return any(
        needle in (getattr(activity, field) or "").lower()
        for activity in report.activities
        for field in _ACTIVITY_TEXT_FIELDS
    )


def filter_by_projects(reports: Iterable[DailyReport], projects: Iterable[str] | None) -> List[DailyReport]:
    selected = set(projects or [])
    if not selected:
        return list(reports)
    return [r for r in reports if any(a.project_category in selected for a in r.activities)]


_SORT_KEYS = {
    SortOption.DATE_DESC: (lambda r: r.date, True),
    SortOption.DATE_ASC: (lambda r: r.date, False),
    SortOption.UPDATED_DESC: (lambda r: r.updated_at, True),
    SortOption.UPDATED_ASC: (lambda r: r.updated_at, False),
    SortOption.HOURS_DESC: (lambda r: r.total_hours, True),
    SortOption.HOURS_ASC: (lambda r: r.total_hours, False),
}


def sort_reports(reports: Iterable[DailyReport], sort: SortOption | str = SortOption.DATE_DESC) -> List[DailyReport]:
    key, reverse = _SORT_KEYS[SortOption(sort)]
    return sorted(reports, key=key, reverse=reverse)


def available_projects(reports: Iterable[DailyReport]) -> List[str]:
    return sorted({a.project_category for r in reports for a in r.activities if a.project_category})


def apply_report_query(
    reports: Iterable[DailyReport],
    keyword: str | None = None,
    projects: Iterable[str] | None = None,
    sort: SortOption | str = SortOption.DATE_DESC,
) -> List[DailyReport]:
    filtered = [r for r in reports if matches_keyword(r, keyword)]
    filtered = filter_by_projects(filtered, projects)
    return sort_reports(filtered, sort)
