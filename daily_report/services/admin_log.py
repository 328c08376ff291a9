# daily_report/services/admin_log.py
import logging
from enum import Enum

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from daily_report.db import models

logger = logging.getLogger(__name__)


class AdminActionType(str, Enum):
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    VIEW_REPORT = "VIEW_REPORT"
    FILTER_REPORTS = "FILTER_REPORTS"
    CHANGE_USER_ROLE = "CHANGE_USER_ROLE"
    DELETE_USER = "DELETE_USER"
    VIEW_USERS = "VIEW_USERS"
    VIEW_LOGS = "VIEW_LOGS"
    CREATE_INVITATION_CODE = "CREATE_INVITATION_CODE"
    DELETE_INVITATION_CODE = "DELETE_INVITATION_CODE"


def get_ip_address(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else None


def record_admin_log(
    db: Session,
    admin: models.User,
    action_type: AdminActionType,
    *,
    request: Request | None = None,
    target_user_id: int | None = None,
    target_report_id: int | None = None,
    details: str | None = None,
) -> models.AdminLog | None:
    """
    Appends an audit entry and commits it.

    A failed write is logged and swallowed: the admin's own request has already
    succeeded and must not be turned into an error by the audit trail.
    """
    entry = models.AdminLog(
        admin_id=admin.id,
        action_type=AdminActionType(action_type).value,
        target_user_id=target_user_id,
        target_report_id=target_report_id,
        details=details,
        ip_address=get_ip_address(request) if request is not None else None,
    )
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to record admin log (admin_id=%s action=%s)", admin.id, entry.action_type)
        return None
    return entry


def list_admin_logs(
    db: Session,
    admin_id: int | None = None,
    action_type: AdminActionType | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[models.AdminLog]:
    query = db.query(models.AdminLog).options(joinedload(models.AdminLog.admin))
    if admin_id is not None:
        query = query.filter(models.AdminLog.admin_id == admin_id)
    if action_type is not None:
        query = query.filter(models.AdminLog.action_type == AdminActionType(action_type).value)
    return (
        query.order_by(models.AdminLog.created_at.desc(), models.AdminLog.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
