"""
Submission-window schemas.

A wellness submission can only be written while its window is open:

- ``pre``: opens a fixed lead time before the session, closes exactly
  at the scheduled start.
- ``post``: opens when the session is expected to end, closes 24h after
  the athlete's first post write (or 48h after the session start if the
  athlete never started one).

Once expired, the window falls under the unlock state machine
(``locked → unlock_requested → unlocked | denied``).
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WindowKind(str, Enum):
    PRE = "pre"
    POST = "post"


class UnlockState(str, Enum):
    LOCKED = "locked"
    UNLOCK_REQUESTED = "unlock_requested"
    UNLOCKED = "unlocked"
    DENIED = "denied"


class UnlockDecision(str, Enum):
    APPROVE = "approve"
    DENY = "deny"


class WindowState(BaseModel):
    """Resolved state of one submission window at a given instant."""

    kind: WindowKind
    opens_at: datetime.datetime
    closes_at: datetime.datetime
    remaining_minutes: int = Field(..., ge=0, description="Minutes until closes_at, clamped at 0")
    is_expired: bool
    is_open: bool = Field(..., description="opens_at <= now and not expired")
    unlock_state: Optional[UnlockState] = Field(
        None, description="Unlock state-machine position (None until the window first expires)",
    )
    can_request_unlock: bool = False


class UnlockStatus(BaseModel):
    """Persisted unlock state for one (athlete, session, kind)."""

    athlete_id: int
    session_id: int
    kind: WindowKind
    state: UnlockState
    reason: Optional[str] = None
    requested_at: Optional[datetime.datetime] = None
    resolved_at: Optional[datetime.datetime] = None
    resolved_by: Optional[str] = None


class UnlockRequestCreate(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)


class UnlockDecisionCreate(BaseModel):
    decision: UnlockDecision
    resolved_by: Optional[str] = Field(None, max_length=255)
