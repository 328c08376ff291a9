# daily_report/db/models.py
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    employee_number = Column(String(50), unique=True, nullable=False, index=True)
    employee_name = Column(String(100), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)
    is_super_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    # AUTOINCREMENT keeps SQLite from handing a deleted user's id to a newcomer
    __table_args__ = (
        CheckConstraint("role IN ('USER', 'ADMIN')", name="ck_users_role"),
        {"sqlite_autoincrement": True},
    )
    reports = relationship("DailyReport", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class DailyReport(Base):
    __tablename__ = "daily_reports"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    daily_goal = Column(Text, nullable=False, default="")
    improvements = Column(Text, nullable=False, default="")
    happy_moments = Column(Text, nullable=False, default="")
    future_tasks = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    # One report per employee per day
    __table_args__ = ( UniqueConstraint("user_id", "date", name="uq_daily_reports_user_date"), )
    user = relationship("User", back_populates="reports")
    activities = relationship(
        "Activity", back_populates="report", cascade="all, delete-orphan", order_by="Activity.order"
    )

    @property
    def total_hours(self) -> float:
        return sum(activity.working_hours or 0 for activity in self.activities)


class Activity(Base):
    __tablename__ = "activities"
    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(Integer, ForeignKey("daily_reports.id", ondelete="CASCADE"), nullable=False, index=True)
    project_category = Column(String(100), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    working_hours = Column(Float, nullable=False, default=0)
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)
    issues = Column(Text, nullable=False, default="")
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    __table_args__ = ( CheckConstraint("working_hours >= 0", name="ck_activities_hours"), )
    report = relationship("DailyReport", back_populates="activities")


class InvitationCode(Base):
    __tablename__ = "invitation_codes"
    id = Column(Integer, primary_key=True, index=True)
    employee_number = Column(String(50), unique=True, nullable=False, index=True)
    is_used = Column(Boolean, nullable=False, default=False)
    used_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    used_at = Column(DateTime, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class AdminLog(Base):
    __tablename__ = "admin_logs"
    id = Column(Integer, primary_key=True, index=True)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    action_type = Column(String(50), nullable=False, index=True)
    # Plain ids: log rows outlive the users and reports they mention
    target_user_id = Column(Integer, nullable=True)
    target_report_id = Column(Integer, nullable=True)
    details = Column(Text, nullable=True)
    ip_address = Column(String(64), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    admin = relationship("User")
