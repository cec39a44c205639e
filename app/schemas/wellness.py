"""Wellness submission schemas (pre- and post-session ratings, 0-10)."""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.window import WindowKind


class WellnessPreValues(BaseModel):
    sleep_quality: int = Field(..., ge=0, le=10)
    fatigue_level: int = Field(..., ge=0, le=10)
    stress_level: int = Field(..., ge=0, le=10)
    muscle_soreness: int = Field(..., ge=0, le=10)
    mood: int = Field(..., ge=0, le=10)
    readiness: int = Field(..., ge=0, le=10)
    notes: Optional[str] = Field(None, max_length=1000)


class WellnessPostValues(BaseModel):
    session_rpe: float = Field(..., ge=0, le=10, description="Borg CR-10 session RPE")
    fatigue_after: int = Field(..., ge=0, le=10)
    mood_after: int = Field(..., ge=0, le=10)
    muscle_soreness_after: int = Field(..., ge=0, le=10)
    minutes_effective: Optional[int] = Field(
        None, ge=0, description="Effective minutes (defaults to the planned session duration)",
    )
    notes: Optional[str] = Field(None, max_length=1000)


class WellnessSubmissionResponse(BaseModel):
    id: int
    athlete_id: int
    session_id: int
    kind: WindowKind
    ratings: dict
    internal_load: Optional[float] = None
    minutes_effective: Optional[int] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class SessionWellnessStatus(BaseModel):
    """Per-session response summary for staff."""

    session_id: int
    total_athletes: int
    responded_pre: int
    responded_post: int
    pending_pre: list[int]
    pending_post: list[int]
    response_rate_pre: float = Field(..., description="Percentage 0-100")
    response_rate_post: float = Field(..., description="Percentage 0-100")


class AthleteWellnessSummary(BaseModel):
    """Trailing-period wellness averages, response counts and critical patterns for one athlete.

    Averages are ``None`` when the period holds nothing to average.
    """

    athlete_id: int
    period_days: int

    # Pre averages
    avg_sleep_quality: Optional[float] = None
    avg_fatigue_level: Optional[float] = None
    avg_stress_level: Optional[float] = None
    avg_muscle_soreness: Optional[float] = None
    avg_mood: Optional[float] = None
    avg_readiness: Optional[float] = None

    # Post averages
    avg_session_rpe: Optional[float] = None
    avg_internal_load: Optional[float] = None

    total_sessions: int
    responded_pre: int
    responded_post: int
    response_rate: float = Field(..., description="Percentage 0-100 of sessions with both submissions")

    high_fatigue_days: int = Field(..., description="Pre reports with fatigue_level >= 8")
    high_stress_days: int = Field(..., description="Pre reports with stress_level >= 8")
    low_readiness_days: int = Field(..., description="Pre reports with readiness <= 3")
