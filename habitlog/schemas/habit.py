import re
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from habitlog.dates import WEEKDAY_KEYS

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def normalize_days(raw_days: Any) -> list[str]:
    """Return weekday keys in week order; ``[]`` (or ``"daily"``) means every day."""
    if raw_days is None:
        return []
    if not isinstance(raw_days, list):
        raise ValueError("Target days must be an array")
    days: set[str] = set()
    for item in raw_days:
        val = str(item).strip().lower()
        if val == "daily":
            return []
        if val not in WEEKDAY_KEYS:
            raise ValueError(f"Unknown weekday: {item!r}")
        days.add(val)
    if len(days) == len(WEEKDAY_KEYS):
        return []
    return [key for key in WEEKDAY_KEYS if key in days]


class _HabitFields(BaseModel):
    class Config:
        populate_by_name = True

    @field_validator("name", check_fields=False)
    @classmethod
    def _name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("color", check_fields=False)
    @classmethod
    def _color_format(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not _COLOR_RE.match(value):
            raise ValueError("Invalid color format")
        return value

    @field_validator("target_days", mode="before", check_fields=False)
    @classmethod
    def _days(cls, value: Any) -> list[str]:
        return normalize_days(value)


class HabitCreateIn(_HabitFields):
    name: str
    description: Optional[str] = None
    tracking_type: Literal["completion", "duration"] = Field(alias="trackingType")
    target_duration: Optional[int] = Field(default=None, alias="targetDuration")
    target_days: list[str] = Field(default_factory=list, alias="targetDays")
    category: Optional[str] = None
    color: str = "#3b82f6"
    icon: Optional[str] = None

    @model_validator(mode="after")
    def _duration_needs_target(self) -> "HabitCreateIn":
        if self.tracking_type == "duration" and (self.target_duration is None or self.target_duration < 1):
            raise ValueError("Target duration must be at least 1 minute")
        return self


class HabitUpdateIn(_HabitFields):
    name: Optional[str] = None
    description: Optional[str] = None
    tracking_type: Optional[Literal["completion", "duration"]] = Field(default=None, alias="trackingType")
    target_duration: Optional[int] = Field(default=None, alias="targetDuration")
    target_days: Optional[list[str]] = Field(default=None, alias="targetDays")
    category: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    active: Optional[bool] = None


class HabitOut(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    tracking_type: str
    target_duration: Optional[int] = None
    target_days: list[str]
    category: Optional[str] = None
    color: str
    icon: Optional[str] = None
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
