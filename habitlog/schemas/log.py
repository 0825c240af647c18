import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class LogUpsertIn(BaseModel):
    date: str
    completed: Optional[bool] = None
    duration: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class DailyLogOut(BaseModel):
    id: int
    user_id: int
    habit_id: int
    date: dt.date = Field(validation_alias="log_date")
    completed: bool
    duration: int
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
