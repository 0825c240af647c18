import json
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habitlog.models.base import Base

TRACKING_COMPLETION = "completion"
TRACKING_DURATION = "duration"
TRACKING_TYPES = (TRACKING_COMPLETION, TRACKING_DURATION)


class Habit(Base):
    __tablename__ = "habits"
    __table_args__ = (
        CheckConstraint("tracking_type IN ('completion', 'duration')", name="ck_habits_tracking_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tracking_type: Mapped[str] = mapped_column(String(16), default=TRACKING_COMPLETION)
    target_duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    # JSON list of weekday keys ("mon".."sun"); empty list means every day.
    target_days_json: Mapped[str] = mapped_column(Text, default="[]")
    category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    color: Mapped[str] = mapped_column(String(7), default="#3b82f6")
    icon: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    user: Mapped["User"] = relationship(back_populates="habits")
    logs: Mapped[list["DailyLog"]] = relationship(
        back_populates="habit", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def target_days(self) -> list[str]:
        if not self.target_days_json:
            return []
        try:
            parsed = json.loads(self.target_days_json)
        except ValueError:
            return []
        return [str(x) for x in parsed] if isinstance(parsed, list) else []

    @target_days.setter
    def target_days(self, days: list[str]) -> None:
        self.target_days_json = json.dumps(list(days))

    @property
    def is_duration(self) -> bool:
        return self.tracking_type == TRACKING_DURATION
