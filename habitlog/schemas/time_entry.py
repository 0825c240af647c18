from datetime import datetime

from pydantic import BaseModel, Field


class TimeEntryIn(BaseModel):
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    class Config:
        populate_by_name = True


class TimeEntryOut(BaseModel):
    id: int
    habit_log_id: int
    start_time: str
    end_time: str
    duration_minutes: int
    created_at: datetime

    class Config:
        from_attributes = True
