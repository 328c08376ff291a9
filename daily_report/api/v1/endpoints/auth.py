# daily_report/api/v1/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import update
from sqlalchemy.orm import Session

from daily_report.core import security
from daily_report.db import models, session
from daily_report.schemas import user as user_schema
from daily_report.services.admin_log import AdminActionType, record_admin_log

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_token(response: Response, user: models.User) -> str:
    token = security.create_access_token(user)
    security.set_auth_cookie(response, token)
    return token


@router.post("/login", response_model=user_schema.AuthResponse)
def login(
    credentials: user_schema.Credentials,
    request: Request,
    response: Response,
    db: Session = Depends(session.get_db),
):
    user = db.query(models.User).filter(models.User.employee_number == credentials.employee_number).first()
    if not user or not security.verify_password(credentials.password, user.hashed_password):
        logger.warning("Failed login for employee_number=%s", credentials.employee_number)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid employee number or password")

    token = _issue_token(response, user)
    if user.is_admin:
        record_admin_log(db, user, AdminActionType.LOGIN, request=request, details="Administrator logged in")
    return {"user": user, "token": token}


@router.post("/signup", response_model=user_schema.AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    account: user_schema.AccountCreate,
    response: Response,
    db: Session = Depends(session.get_db),
):
    """
    Creates an account for an employee number that was issued an invitation code.
    The code is consumed in the same transaction that creates the user.
    """
    invitation = db.query(models.InvitationCode).filter(
        models.InvitationCode.employee_number == account.employee_number
    ).first()
    if not invitation:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This employee number has not been issued an invitation. Please contact an administrator.",
        )
    if invitation.is_used:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This invitation has already been used")
    if db.query(models.User).filter(models.User.employee_number == account.employee_number).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This employee number is already registered")

    user = models.User(
        employee_number=account.employee_number,
        employee_name=account.employee_name,
        hashed_password=security.get_password_hash(account.password),
        role=models.ROLE_USER,
    )
    db.add(user)
    db.flush()

    # Conditional claim: only one concurrent signup can flip is_used
    claimed = db.execute(
        update(models.InvitationCode)
        .where(models.InvitationCode.id == invitation.id, models.InvitationCode.is_used.is_(False))
        .values(is_used=True, used_by=user.id, used_at=models.utcnow())
        .execution_options(synchronize_session=False)
    )
    if claimed.rowcount != 1:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This invitation has already been used")

    db.commit()
    logger.info("User %s signed up", user.employee_number)

    token = _issue_token(response, user)
    return {"user": user, "token": token}


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    db: Session = Depends(session.get_db),
    current_user: models.User | None = Depends(security.get_optional_user),
):
    if current_user is not None and current_user.is_admin:
        record_admin_log(db, current_user, AdminActionType.LOGOUT, request=request, details="Administrator logged out")
    security.clear_auth_cookie(response)
    return {"message": "Logged out"}


@router.get("/me", response_model=user_schema.MeResponse)
def read_user_me(current_user: models.User = Depends(security.get_current_user)):
    """
    Get the details for the currently logged-in user.
    """
    return {"user": current_user}
