"""
Load sample database model.

One aggregated internal-load value per athlete per calendar day, kept in
sync with the day's post-session wellness submissions.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class LoadSample(SQLModel, table=True):
    __tablename__ = "load_samples"
    __table_args__ = (
        UniqueConstraint("athlete_id", "date", name="uq_load_athlete_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: int = Field(foreign_key="athletes.id", nullable=False, index=True)
    date: datetime.date = Field(nullable=False, index=True)
    internal_load: float = Field(default=0.0, nullable=False)

    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
