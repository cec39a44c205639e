"""Pydantic schemas for request/response validation."""

from app.schemas.window import (
    WindowKind,
    UnlockState,
    UnlockDecision,
    WindowState,
    UnlockStatus,
    UnlockRequestCreate,
    UnlockDecisionCreate,
)
from app.schemas.load import Zone, LoadSampleData, LoadResult
from app.schemas.eligibility import AthleteState, AthleteProfile, CategoryBracket, EligibilityResult
from app.schemas.wellness import (
    WellnessPreValues,
    WellnessPostValues,
    WellnessSubmissionResponse,
    SessionWellnessStatus,
    AthleteWellnessSummary,
)
from app.schemas.snapshot import (
    PresenceStatus,
    WellnessStatus,
    LoadStatus,
    OverallStatus,
    AlertLevel,
    AlertType,
    Alert,
    AthleteStatusRow,
    SessionInfo,
    SessionSnapshot,
)

__all__ = [
    "WindowKind",
    "UnlockState",
    "UnlockDecision",
    "WindowState",
    "UnlockStatus",
    "UnlockRequestCreate",
    "UnlockDecisionCreate",
    "Zone",
    "LoadSampleData",
    "LoadResult",
    "AthleteState",
    "AthleteProfile",
    "CategoryBracket",
    "EligibilityResult",
    "WellnessPreValues",
    "WellnessPostValues",
    "WellnessSubmissionResponse",
    "SessionWellnessStatus",
    "AthleteWellnessSummary",
    "PresenceStatus",
    "WellnessStatus",
    "LoadStatus",
    "OverallStatus",
    "AlertLevel",
    "AlertType",
    "Alert",
    "AthleteStatusRow",
    "SessionInfo",
    "SessionSnapshot",
]
