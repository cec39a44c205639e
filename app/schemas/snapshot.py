"""
Session snapshot schemas.

The snapshot is derived on every read and never persisted.  Fields that
come from a data source that failed are ``None`` (absent), and the
snapshot is flagged ``data_incomplete`` with the names of the missing
sources.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.load import Zone


class PresenceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class WellnessStatus(str, Enum):
    OK = "ok"
    PENDING = "pending"


class LoadStatus(str, Enum):
    OK = "ok"
    ALERT = "alert"
    CRITICAL = "critical"
    NO_DATA = "no_data"


class OverallStatus(str, Enum):
    CRITICAL = "critical"
    ATTENTION = "attention"
    OK = "ok"

    @property
    def priority(self) -> int:
        """Lower sorts first."""
        return _OVERALL_PRIORITY[self]


_OVERALL_PRIORITY = {OverallStatus.CRITICAL: 0, OverallStatus.ATTENTION: 1, OverallStatus.OK: 2}


class AlertLevel(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def priority(self) -> int:
        return _ALERT_PRIORITY[self]


_ALERT_PRIORITY = {AlertLevel.CRITICAL: 0, AlertLevel.WARNING: 1, AlertLevel.INFO: 2}


class AlertType(str, Enum):
    WELLNESS = "wellness"
    LOAD = "load"
    MEDICAL = "medical"
    DATA = "data"


class SessionPhase(str, Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class WellnessPresence(BaseModel):
    """Which wellness submissions exist for an athlete in a session."""

    has_pre: bool = False
    has_post: bool = False

    @property
    def complete(self) -> bool:
        return self.has_pre and self.has_post


class SessionInfo(BaseModel):
    """Scheduling view of a training session."""

    id: int
    team_id: int
    scheduled_start: datetime.datetime
    planned_duration_minutes: int = Field(..., ge=0)

    @property
    def expected_end(self) -> datetime.datetime:
        return self.scheduled_start + datetime.timedelta(minutes=self.planned_duration_minutes)


class SessionContext(BaseModel):
    session_id: int
    team_id: int
    date: datetime.date
    scheduled_start: datetime.datetime
    planned_duration_minutes: int
    status: SessionPhase


class ProcessStatus(BaseModel):
    total_athletes: int
    present: Optional[int] = None
    absent: Optional[int] = None
    wellness_pending: Optional[int] = None
    engagement_rate: Optional[float] = None
    engagement_status: Optional[str] = Field(None, description="active, partial or inactive")
    session_risk: bool = False


class LoadSummary(BaseModel):
    session_load_avg: Optional[float] = None
    team_baseline_avg: Optional[float] = None
    deviation_pct: Optional[float] = None
    out_of_zone_athletes: Optional[int] = None


class AthleteStatusRow(BaseModel):
    athlete_id: int
    name: str
    presence: Optional[PresenceStatus] = None
    wellness: Optional[WellnessStatus] = None
    has_pre: Optional[bool] = None
    has_post: Optional[bool] = None
    acwr: Optional[float] = None
    zone: Optional[Zone] = None
    load_status: Optional[LoadStatus] = None
    natural_category: Optional[str] = None
    can_play_today: bool
    reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    overall_status: OverallStatus
    status_rules: list[str] = Field(default_factory=list, description="Rules that produced overall_status")


class Alert(BaseModel):
    level: AlertLevel
    type: AlertType
    rule: str
    message: str
    athlete_id: Optional[int] = None


class SessionSnapshot(BaseModel):
    context: SessionContext
    process_status: ProcessStatus
    load_summary: LoadSummary
    athletes: list[AthleteStatusRow]
    alerts: list[Alert]
    data_incomplete: bool = False
    missing_sources: list[str] = Field(default_factory=list)
    generated_at: datetime.datetime
