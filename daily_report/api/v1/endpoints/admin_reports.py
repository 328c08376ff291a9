# daily_report/api/v1/endpoints/admin_reports.py
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session, joinedload, selectinload

from daily_report.api.v1.endpoints.reports import NOT_FOUND, filter_by_period
from daily_report.core import security
from daily_report.db import models, session
from daily_report.schemas import report as report_schema
from daily_report.services.admin_log import AdminActionType, record_admin_log
from daily_report.services.date_range import DatePreset, resolve_period
from daily_report.services.report_query import SortOption, apply_report_query, available_projects

router = APIRouter()


def _reports_query(db: Session):
    return db.query(models.DailyReport).options(
        selectinload(models.DailyReport.activities), joinedload(models.DailyReport.user)
    )


def _describe_filters(**filters) -> str:
    parts = [f"{name}={value}" for name, value in filters.items() if value not in (None, "", [])]
    return "Filtered reports: " + ", ".join(parts)


@router.get("", response_model=List[report_schema.ReportWithUser])
def list_all_reports(
    request: Request,
    user_id: int | None = None,
    employee_number: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    preset: DatePreset | None = None,
    keyword: str | None = None,
    project: List[str] = Query(default=[]),
    sort: SortOption = SortOption.DATE_DESC,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    """ Returns reports across all employees, newest first unless sorted otherwise. """
    query = _reports_query(db)

    if user_id is not None:
        query = query.filter(models.DailyReport.user_id == user_id)

    # An unknown employee number matches nothing rather than everything
    unknown_employee = False
    if employee_number:
        target = db.query(models.User).filter(models.User.employee_number == employee_number).first()
        if target is None:
            unknown_employee = True
        else:
            query = query.filter(models.DailyReport.user_id == target.id)

    period_start, period_end = resolve_period(preset, start_date, end_date)
    reports = [] if unknown_employee else filter_by_period(query, period_start, period_end).all()

    filters = {
        "user_id": user_id,
        "employee_number": employee_number,
        "preset": preset.value if preset else None,
        "start_date": period_start,
        "end_date": period_end,
        "keyword": keyword,
        "project": project,
    }
    if any(value not in (None, "", []) for value in filters.values()):
        record_admin_log(
            db, admin, AdminActionType.FILTER_REPORTS,
            request=request,
            target_user_id=user_id,
            details=_describe_filters(**filters),
        )

    return apply_report_query(reports, keyword=keyword, projects=project, sort=sort)


@router.get("/projects", response_model=List[str])
def list_all_projects(
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    return available_projects(_reports_query(db).all())


@router.get("/{report_id}", response_model=report_schema.ReportWithUser)
def read_any_report(
    report_id: int,
    request: Request,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    report = _reports_query(db).filter(models.DailyReport.id == report_id).first()
    if not report:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    record_admin_log(
        db, admin, AdminActionType.VIEW_REPORT,
        request=request,
        target_user_id=report.user_id,
        target_report_id=report.id,
        details=f"Viewed report of {report.user.employee_name} ({report.date.isoformat()})",
    )
    return report
