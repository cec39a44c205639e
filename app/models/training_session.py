"""
Training session database model.

Created by scheduling; immutable once started except for the actual
duration.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class TrainingSession(SQLModel, table=True):
    """A scheduled team training session."""

    __tablename__ = "training_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(nullable=False, index=True)
    scheduled_start: datetime.datetime = Field(nullable=False, index=True)
    planned_duration_minutes: int = Field(default=90, nullable=False)
    actual_duration_minutes: Optional[int] = Field(default=None)
    session_type: str = Field(default="training", nullable=False, max_length=20)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
