# daily_report/api/v1/endpoints/invitation_codes.py
# Invitation codes gate self-service signup: one pre-issued code per employee number.
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from daily_report.core import security
from daily_report.db import models, session
from daily_report.schemas import admin as admin_schema
from daily_report.services.admin_log import AdminActionType, record_admin_log

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[admin_schema.InvitationCode])
def list_invitation_codes(
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    return (
        db.query(models.InvitationCode)
        .order_by(models.InvitationCode.created_at.desc(), models.InvitationCode.id.desc())
        .all()
    )


@router.post("", response_model=admin_schema.InvitationCode, status_code=status.HTTP_201_CREATED)
def issue_invitation_code(
    code_in: admin_schema.InvitationCodeCreate,
    request: Request,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    employee_number = code_in.employee_number
    if db.query(models.InvitationCode).filter(models.InvitationCode.employee_number == employee_number).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="An invitation has already been issued for this employee number"
        )
    if db.query(models.User).filter(models.User.employee_number == employee_number).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="This employee number is already in use")

    invitation = models.InvitationCode(employee_number=employee_number, created_by=admin.id)
    db.add(invitation)
    db.commit()
    db.refresh(invitation)

    record_admin_log(
        db, admin, AdminActionType.CREATE_INVITATION_CODE,
        request=request, details=f"Issued invitation for {employee_number}",
    )
    return invitation


@router.delete("/{code_id}")
def delete_invitation_code(
    code_id: int,
    request: Request,
    db: Session = Depends(session.get_db),
    admin: models.User = Depends(security.get_current_admin_user)
):
    """ Only unused codes can be deleted; used ones are kept as signup history. """
    invitation = db.get(models.InvitationCode, code_id)
    if not invitation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
    if invitation.is_used:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A used invitation cannot be deleted")

    employee_number = invitation.employee_number
    db.delete(invitation)
    db.commit()

    record_admin_log(
        db, admin, AdminActionType.DELETE_INVITATION_CODE,
        request=request, details=f"Deleted invitation for {employee_number}",
    )
    return {"success": True}
