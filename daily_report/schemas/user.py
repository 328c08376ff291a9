# daily_report/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

MIN_PASSWORD_LENGTH = 6


class UserBrief(BaseModel):
    id: int
    employee_number: str
    employee_name: str

    class Config:
        from_attributes = True


class User(UserBrief):
    role: Literal["USER", "ADMIN"]
    is_super_admin: bool

    class Config:
        from_attributes = True


class UserDetail(User):
    created_at: datetime
    updated_at: datetime


class UserWithReportCount(User):
    created_at: datetime
    reports_count: int = 0


class AdminSummary(UserBrief):
    role: str


class Credentials(BaseModel):
    employee_number: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AccountCreate(BaseModel):
    """ Body shared by self-service signup and first-run setup. """
    employee_number: str = Field(min_length=1, max_length=50)
    employee_name: str = Field(min_length=1, max_length=100)
    password: str

    @field_validator("employee_number", "employee_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"must be at least {MIN_PASSWORD_LENGTH} characters")
        return value


class RoleUpdate(BaseModel):
    role: Literal["USER", "ADMIN"]


class AuthResponse(BaseModel):
    user: User
    token: str


class MeResponse(BaseModel):
    user: User


class SetupResponse(AuthResponse):
    message: str


class SetupCheck(BaseModel):
    can_setup: bool
    has_admin: bool
