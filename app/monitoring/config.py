"""
Engine thresholds, declared in one place.

Window spans, load windows, ACWR zone bounds, engagement bounds and alert
thresholds are read through :class:`MonitoringConfig`.  Defaults come from
:mod:`app.core.thresholds`, shared with the settings fields; deployments
override them globally through :class:`app.core.config.Settings`
(``MonitoringConfig.from_settings``).  There is no per-team override.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from app.core.config import Settings
from app.core.thresholds import (ACUTE_DAYS, ACWR_LOWER, ACWR_UPPER, CHRONIC_DAYS, DEVIATION_ALERT_PCT,
                                 ENGAGEMENT_ACTIVE_RATE, ENGAGEMENT_PARTIAL_RATE, POST_WINDOW_HOURS,
                                 PRE_WINDOW_LEAD_HOURS, RECENT_INJURY_DAYS, RESPONSE_RATE_THRESHOLD,
                                 SOURCE_TIMEOUT_SECONDS, UNLOCK_REOPEN_HOURS, UNSTARTED_POST_GRACE_HOURS, )


class WindowConfig(BaseModel):
    """Submission-window spans, in hours."""

    pre_lead_hours: float = Field(PRE_WINDOW_LEAD_HOURS, gt=0)
    post_hours: float = Field(POST_WINDOW_HOURS, gt=0)
    unstarted_post_grace_hours: float = Field(UNSTARTED_POST_GRACE_HOURS, gt=0)
    unlock_reopen_hours: float = Field(UNLOCK_REOPEN_HOURS, gt=0)


class LoadConfig(BaseModel):
    """Rolling windows and ACWR zone bounds."""

    acute_days: int = Field(ACUTE_DAYS, ge=1)
    chronic_days: int = Field(CHRONIC_DAYS, ge=1)
    zone_lower: float = Field(ACWR_LOWER, gt=0)
    zone_upper: float = Field(ACWR_UPPER, gt=0)
    recent_injury_days: int = Field(RECENT_INJURY_DAYS, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "LoadConfig":
        if self.acute_days > self.chronic_days:
            raise ValueError("acute_days must not exceed chronic_days")
        if self.zone_lower >= self.zone_upper:
            raise ValueError("zone_lower must be below zone_upper")
        return self


class SnapshotConfig(BaseModel):
    """Engagement bounds, alert thresholds and source timeouts."""

    engagement_active_rate: float = Field(ENGAGEMENT_ACTIVE_RATE, gt=0, le=1)
    engagement_partial_rate: float = Field(ENGAGEMENT_PARTIAL_RATE, ge=0, le=1)
    deviation_alert_pct: float = Field(DEVIATION_ALERT_PCT, ge=0)
    response_rate_threshold: float = Field(RESPONSE_RATE_THRESHOLD, ge=0, le=1)
    source_timeout_seconds: float = Field(SOURCE_TIMEOUT_SECONDS, gt=0)


class MonitoringConfig(BaseModel):
    window: WindowConfig = Field(default_factory=WindowConfig)
    load: LoadConfig = Field(default_factory=LoadConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MonitoringConfig":
        return cls(
            window=WindowConfig(
                pre_lead_hours=settings.PRE_WINDOW_LEAD_HOURS,
                post_hours=settings.POST_WINDOW_HOURS,
                unstarted_post_grace_hours=settings.UNSTARTED_POST_GRACE_HOURS,
                unlock_reopen_hours=settings.UNLOCK_REOPEN_HOURS,
            ),
            load=LoadConfig(
                acute_days=settings.ACUTE_DAYS,
                chronic_days=settings.CHRONIC_DAYS,
                zone_lower=settings.ACWR_LOWER,
                zone_upper=settings.ACWR_UPPER,
                recent_injury_days=settings.RECENT_INJURY_DAYS,
            ),
            snapshot=SnapshotConfig(
                engagement_active_rate=settings.ENGAGEMENT_ACTIVE_RATE,
                engagement_partial_rate=settings.ENGAGEMENT_PARTIAL_RATE,
                deviation_alert_pct=settings.DEVIATION_ALERT_PCT,
                response_rate_threshold=settings.RESPONSE_RATE_THRESHOLD,
                source_timeout_seconds=settings.SOURCE_TIMEOUT_SECONDS,
            ),
        )


# Singleton default config
DEFAULT_CONFIG = MonitoringConfig()
