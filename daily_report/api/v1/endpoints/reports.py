# daily_report/api/v1/endpoints/reports.py
# Owner-scoped daily report CRUD: every query is restricted to the caller's reports.
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Query as OrmQuery, Session, selectinload

from daily_report.core import security
from daily_report.db import models, session
from daily_report.schemas import report as report_schema
from daily_report.services.date_range import DatePreset, resolve_period
from daily_report.services.report_query import SortOption, apply_report_query, available_projects

router = APIRouter()

DUPLICATE_DATE = "A report for this date already exists"
NOT_FOUND = "Report not found"


def filter_by_period(query: OrmQuery, start_date: date | None, end_date: date | None) -> OrmQuery:
    if start_date:
        query = query.filter(models.DailyReport.date >= start_date)
    if end_date:
        query = query.filter(models.DailyReport.date <= end_date)
    return query


def build_activities(items: List[report_schema.ActivityCreate]) -> List[models.Activity]:
    """ Positions are re-numbered from the list index. """
    return [models.Activity(**item.model_dump(), order=index) for index, item in enumerate(items)]


def _get_own_report(db: Session, report_id: int, user: models.User) -> models.DailyReport:
    report = (
        db.query(models.DailyReport)
        .options(selectinload(models.DailyReport.activities))
        .filter(models.DailyReport.id == report_id, models.DailyReport.user_id == user.id)
        .first()
    )
    if not report:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return report


def _date_taken(db: Session, user_id: int, report_date: date, exclude_id: int | None = None) -> bool:
    query = db.query(models.DailyReport.id).filter(
        models.DailyReport.user_id == user_id, models.DailyReport.date == report_date
    )
    if exclude_id is not None:
        query = query.filter(models.DailyReport.id != exclude_id)
    return query.first() is not None


@router.get("", response_model=List[report_schema.Report])
def list_my_reports(
    start_date: date | None = None,
    end_date: date | None = None,
    preset: DatePreset | None = None,
    keyword: str | None = None,
    project: List[str] = Query(default=[]),
    sort: SortOption = SortOption.DATE_DESC,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    """ Returns the caller's reports, narrowed by period, keyword and project. """
    start_date, end_date = resolve_period(preset, start_date, end_date)
    query = (
        db.query(models.DailyReport)
        .options(selectinload(models.DailyReport.activities))
        .filter(models.DailyReport.user_id == current_user.id)
    )
    reports = filter_by_period(query, start_date, end_date).all()
    return apply_report_query(reports, keyword=keyword, projects=project, sort=sort)


@router.get("/projects", response_model=List[str])
def list_my_projects(
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    reports = (
        db.query(models.DailyReport)
        .options(selectinload(models.DailyReport.activities))
        .filter(models.DailyReport.user_id == current_user.id)
        .all()
    )
    return available_projects(reports)


@router.post("", response_model=report_schema.Report, status_code=status.HTTP_201_CREATED)
def create_report(
    report_in: report_schema.ReportCreate,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    if _date_taken(db, current_user.id, report_in.date):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_DATE)

    report = models.DailyReport(
        user_id=current_user.id,
        date=report_in.date,
        daily_goal=report_in.daily_goal,
        improvements=report_in.improvements,
        happy_moments=report_in.happy_moments,
        future_tasks=report_in.future_tasks,
        activities=build_activities(report_in.activities),
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


@router.get("/{report_id}", response_model=report_schema.Report)
def read_report(
    report_id: int,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    return _get_own_report(db, report_id, current_user)


@router.put("/{report_id}", response_model=report_schema.Report)
def update_report(
    report_id: int,
    updates: report_schema.ReportUpdate,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    """ Partial update; a supplied activity list replaces the existing one. """
    report = _get_own_report(db, report_id, current_user)

    update_data = updates.model_dump(exclude_unset=True, exclude={"activities"})
    if update_data.get("date") is not None and _date_taken(db, current_user.id, update_data["date"], exclude_id=report.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_DATE)

    for field, value in update_data.items():
        if value is not None:
            setattr(report, field, value)

    if updates.activities is not None:
        report.activities = build_activities(updates.activities)
    report.updated_at = models.utcnow()

    db.commit()
    db.refresh(report)
    return report


@router.delete("/{report_id}")
def delete_report(
    report_id: int,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    report = _get_own_report(db, report_id, current_user)
    db.delete(report)
    db.commit()
    return {"message": "Report deleted"}
