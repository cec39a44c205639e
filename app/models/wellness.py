"""
Wellness database models.

``WellnessSubmission`` stores the pre/post ratings as JSON, at most one
per (athlete, session, kind).  ``WellnessUnlock`` holds the unlock
state-machine position for an expired window of the same key; the
submission itself may not exist yet.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


class WellnessSubmission(SQLModel, table=True):
    __tablename__ = "wellness_submissions"
    __table_args__ = (
        UniqueConstraint("athlete_id", "session_id", "kind", name="uq_wellness_athlete_session_kind"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(foreign_key="athletes.id", nullable=False, index=True)
    session_id: int = Field(foreign_key="training_sessions.id", nullable=False, index=True)

    # pre | post
    kind: str = Field(nullable=False, max_length=10)

    # Ratings, validated by the pre/post schemas at service layer
    ratings: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    # Post only
    minutes_effective: Optional[int] = Field(default=None)
    internal_load: Optional[float] = Field(default=None)

    # created_at is the first write and anchors the post-window deadline
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class WellnessUnlock(SQLModel, table=True):
    __tablename__ = "wellness_unlocks"
    __table_args__ = (
        UniqueConstraint("athlete_id", "session_id", "kind", name="uq_unlock_athlete_session_kind"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(foreign_key="athletes.id", nullable=False, index=True)
    session_id: int = Field(foreign_key="training_sessions.id", nullable=False, index=True)
    kind: str = Field(nullable=False, max_length=10)

    # locked | unlock_requested | unlocked | denied
    state: str = Field(nullable=False, max_length=20)
    reason: Optional[str] = Field(default=None, max_length=500)

    requested_at: Optional[datetime.datetime] = Field(default=None)
    resolved_at: Optional[datetime.datetime] = Field(default=None)
    resolved_by: Optional[str] = Field(default=None, max_length=255)
