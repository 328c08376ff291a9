# daily_report/schemas/report.py
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from daily_report.schemas.user import UserBrief

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ActivityBase(BaseModel):
    project_category: str = Field(default="", max_length=100)
    content: str = ""
    working_hours: float = Field(default=0, ge=0)
    start_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    issues: str = ""


class ActivityCreate(ActivityBase):
    pass


class Activity(ActivityBase):
    id: int
    report_id: int
    order: int
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class ReportCreate(BaseModel):
    date: dt.date
    daily_goal: str = ""
    improvements: str = ""
    happy_moments: str = ""
    future_tasks: str = ""
    activities: List[ActivityCreate] = []


class ReportUpdate(BaseModel):
    date: Optional[dt.date] = None
    daily_goal: Optional[str] = None
    improvements: Optional[str] = None
    happy_moments: Optional[str] = None
    future_tasks: Optional[str] = None
    activities: Optional[List[ActivityCreate]] = None


class Report(BaseModel):
    id: int
    user_id: int
    date: dt.date
    daily_goal: str
    improvements: str
    happy_moments: str
    future_tasks: str
    total_hours: float
    created_at: dt.datetime
    updated_at: dt.datetime
    activities: List[Activity]

    class Config:
        from_attributes = True


class ReportWithUser(Report):
    user: UserBrief
