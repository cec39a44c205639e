"""
Athlete database model.

Roster view consumed by the engine: identity, birth date, lifecycle state
and the restriction flags used by the eligibility classifier.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Athlete(SQLModel, table=True):
    """A rostered athlete.  Owned by the roster service, read-only here."""

    __tablename__ = "athletes"

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(nullable=False, index=True)
    full_name: str = Field(nullable=False, max_length=255)
    birth_date: Optional[datetime.date] = Field(default=None)

    # Lifecycle: active | released | archived
    state: str = Field(default="active", nullable=False, max_length=20)

    # Restriction flags
    injured: bool = Field(default=False, nullable=False)
    medical_restriction: bool = Field(default=False, nullable=False)
    suspended_until: Optional[datetime.date] = Field(default=None)
    load_restricted: bool = Field(default=False, nullable=False)
    last_injury_date: Optional[datetime.date] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
