"""
Training-load schemas.

Internal load is session RPE × effective minutes.  ACWR is the acute
(7-day) mean divided by the chronic (28-day) mean and falls in exactly
one zone:

- ``underload``: ACWR < 0.8
- ``optimal``:   0.8 <= ACWR <= 1.5
- ``overload``:  ACWR > 1.5

ACWR is ``None`` (undefined, not zero) until the chronic window holds at
least one sample, or while the chronic mean is zero.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Zone(str, Enum):
    UNDERLOAD = "underload"
    OPTIMAL = "optimal"
    OVERLOAD = "overload"


class LoadSampleData(BaseModel):
    """One aggregated internal-load value for an athlete on a calendar day."""

    athlete_id: int
    date: datetime.date
    internal_load: float = Field(..., ge=0.0)


class LoadResult(BaseModel):
    athlete_id: int
    as_of_date: datetime.date
    acute: float = Field(..., description="Mean daily internal load over the acute window")
    chronic: Optional[float] = Field(None, description="Mean daily internal load over the chronic window")
    acwr: Optional[float] = Field(None, description="acute / chronic, None if undefined")
    zone: Optional[Zone] = None
    days_of_data: int = Field(..., description="Days with a sample in the chronic window")
