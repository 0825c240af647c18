from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habitlog.models.base import Base


class TimeInterval(Base):
    __tablename__ = "time_entries"
    __table_args__ = (CheckConstraint("duration_minutes > 0", name="ck_time_entries_positive_duration"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    habit_log_id: Mapped[int] = mapped_column(ForeignKey("habit_logs.id", ondelete="CASCADE"), index=True)
    start_time: Mapped[str] = mapped_column(String(5))
    end_time: Mapped[str] = mapped_column(String(5))
    duration_minutes: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    log: Mapped["DailyLog"] = relationship(back_populates="intervals")
