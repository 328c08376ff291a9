# daily_report/schemas/admin.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from daily_report.schemas.user import AdminSummary
from daily_report.services.admin_log import AdminActionType


class InvitationCodeCreate(BaseModel):
    employee_number: str = Field(max_length=50)

    @field_validator("employee_number")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class InvitationCode(BaseModel):
    id: int
    employee_number: str
    is_used: bool
    used_by: Optional[int] = None
    used_at: Optional[datetime] = None
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AdminLogCreate(BaseModel):
    action_type: AdminActionType
    target_user_id: Optional[int] = None
    target_report_id: Optional[int] = None
    details: Optional[str] = None


class AdminLog(BaseModel):
    id: int
    admin_id: Optional[int] = None
    action_type: str
    target_user_id: Optional[int] = None
    target_report_id: Optional[int] = None
    details: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: datetime
    admin: Optional[AdminSummary] = None

    class Config:
        from_attributes = True


class AdminLogRecorded(BaseModel):
    success: bool
    log: Optional[AdminLog] = None
