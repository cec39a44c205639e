"""
Eligibility schemas.

Hard blocks (``reasons``) forbid participation; soft flags (``warnings``)
only inform.  ``can_play_today`` is always ``not reasons``.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AthleteState(str, Enum):
    ACTIVE = "active"
    RELEASED = "released"
    ARCHIVED = "archived"


class AthleteProfile(BaseModel):
    """Read-only roster view of an athlete."""

    id: int
    name: str = ""
    birth_date: Optional[datetime.date] = None
    state: AthleteState = AthleteState.ACTIVE
    injured: bool = False
    medical_restriction: bool = False
    suspended_until: Optional[datetime.date] = None
    load_restricted: bool = False
    last_injury_date: Optional[datetime.date] = None


class CategoryBracket(BaseModel):
    """Age bracket ``[min_age, max_age)``; ``max_age=None`` is open-ended."""

    name: str
    min_age: int = Field(..., ge=0)
    max_age: Optional[int] = None

    def contains(self, age: int) -> bool:
        return age >= self.min_age and (self.max_age is None or age < self.max_age)


class EligibilityResult(BaseModel):
    athlete_id: int
    reference_date: datetime.date
    age: int
    natural_category: Optional[str] = None
    eligible_categories: list[str] = Field(default_factory=list)
    can_play_today: bool
    reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    badge: str = Field(..., description="red (blocked), yellow (warnings only) or green")
