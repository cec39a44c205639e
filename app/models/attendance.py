"""Attendance database model: one presence record per athlete per session."""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class AttendanceRecord(SQLModel, table=True):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("athlete_id", "session_id", name="uq_attendance_athlete_session"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(foreign_key="athletes.id", nullable=False, index=True)
    session_id: int = Field(foreign_key="training_sessions.id", nullable=False, index=True)

    # present | absent
    presence_status: str = Field(nullable=False, max_length=20)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
