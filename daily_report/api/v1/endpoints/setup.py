# daily_report/api/v1/endpoints/setup.py
# First-run provisioning: creates the super-admin while no administrator exists.
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from daily_report.core import security
from daily_report.db import models, session
from daily_report.schemas import user as user_schema

logger = logging.getLogger(__name__)

router = APIRouter()


def _admin_count(db: Session) -> int:
    return db.query(models.User).filter(models.User.role == models.ROLE_ADMIN).count()


@router.get("/check", response_model=user_schema.SetupCheck)
def check_setup(db: Session = Depends(session.get_db)):
    """ Setup is only open while there are no administrators at all. """
    can_setup = _admin_count(db) == 0
    return {"can_setup": can_setup, "has_admin": not can_setup}


@router.post("", response_model=user_schema.SetupResponse, status_code=status.HTTP_201_CREATED)
def create_super_admin(
    account: user_schema.AccountCreate,
    response: Response,
    db: Session = Depends(session.get_db),
):
    if _admin_count(db) > 0:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Setup has already been completed")

    if db.query(models.User).filter(models.User.employee_number == account.employee_number).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This employee number is already registered")

    user = models.User(
        employee_number=account.employee_number,
        employee_name=account.employee_name,
        hashed_password=security.get_password_hash(account.password),
        role=models.ROLE_ADMIN,
        is_super_admin=True,
    )
    db.add(user)
    db.commit()
    logger.info("Super-admin %s created", user.employee_number)

    token = security.create_access_token(user)
    security.set_auth_cookie(response, token)
    return {"user": user, "token": token, "message": "Super-admin created"}
