# daily_report/api/v1/endpoints/logs.py
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from daily_report.core import security
from daily_report.db import models, session
from daily_report.schemas import admin as admin_schema
from daily_report.services.admin_log import AdminActionType, list_admin_logs, record_admin_log

router = APIRouter()


@router.post("", response_model=admin_schema.AdminLogRecorded)
def create_log_entry(
    entry: admin_schema.AdminLogCreate,
    request: Request,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    """ Lets an admin client record an action it performed on its own. """
    log = record_admin_log(
        db, admin, entry.action_type,
        request=request,
        target_user_id=entry.target_user_id,
        target_report_id=entry.target_report_id,
        details=entry.details,
    )
    return {"success": log is not None, "log": log}


@router.get("", response_model=List[admin_schema.AdminLog])
def read_logs(
    request: Request,
    admin_id: int | None = None,
    action_type: AdminActionType | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    """ Returns audit entries newest first. Reading the log is itself logged. """
    logs = list_admin_logs(db, admin_id=admin_id, action_type=action_type, limit=limit, offset=offset)
    record_admin_log(db, admin, AdminActionType.VIEW_LOGS, request=request, details=f"Viewed admin log ({len(logs)} entries)")
    return logs
