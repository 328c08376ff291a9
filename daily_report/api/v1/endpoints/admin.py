# daily_report/api/v1/endpoints/admin.py
# Administrator user management: listing, role changes and removal.
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from daily_report.core import security
from daily_report.db import models, session
from daily_report.schemas import user as user_schema
from daily_report.services.admin_log import AdminActionType, record_admin_log

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_user_or_404(db: Session, user_id: int) -> models.User:
    db_user = db.get(models.User, user_id)
    if not db_user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return db_user


@router.get("/users", response_model=List[user_schema.UserWithReportCount])
def get_all_users(
    request: Request,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    """ Retrieves all users with their report counts, ordered by employee number. """
    rows = (
        db.query(models.User, func.count(models.DailyReport.id))
        .outerjoin(models.DailyReport, models.DailyReport.user_id == models.User.id)
        .group_by(models.User.id)
        .order_by(models.User.employee_number)
        .all()
    )
    users = [
        user_schema.UserWithReportCount.model_validate(user).model_copy(update={"reports_count": count})
        for user, count in rows
    ]

    record_admin_log(
        db, admin, AdminActionType.VIEW_USERS, request=request, details=f"Viewed user list ({len(users)} users)"
    )
    return users


@router.patch("/users/{user_id}/role", response_model=user_schema.UserDetail)
def change_user_role(
    user_id: int,
    role_in: user_schema.RoleUpdate,
    request: Request,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    """ Promotes or demotes a user. A super-admin can never be demoted. """
    db_user = _get_user_or_404(db, user_id)

    if db_user.is_super_admin and role_in.role != models.ROLE_ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="The super-admin's role cannot be changed")

    previous_role = db_user.role
    db_user.role = role_in.role
    db.commit()
    db.refresh(db_user)
    logger.info("Role of %s changed from %s to %s by %s",
                db_user.employee_number, previous_role, db_user.role, admin.employee_number)

    record_admin_log(
        db, admin, AdminActionType.CHANGE_USER_ROLE,
        request=request,
        target_user_id=db_user.id,
        details=f"Changed role of {db_user.employee_name} ({db_user.employee_number}) from {previous_role} to {db_user.role}",
    )
    return db_user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(
    user_id: int,
    request: Request,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    """
    Deletes a user together with their reports. The super-admin and the
    calling administrator cannot be removed.
    """
    db_user = _get_user_or_404(db, user_id)

    if db_user.is_super_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="The super-admin cannot be deleted")
    if db_user.id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")

    summary = f"Deleted user {db_user.employee_name} ({db_user.employee_number})"
    db.delete(db_user)
    db.commit()
    logger.info("%s by %s", summary, admin.employee_number)

    record_admin_log(db, admin, AdminActionType.DELETE_USER, request=request, target_user_id=user_id, details=summary)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
