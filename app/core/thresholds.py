"""
Default engine thresholds.

Imported by :class:`app.core.config.Settings` as env-override defaults
and by :mod:`app.monitoring.config` as model defaults.
"""

# Submission windows (hours)
PRE_WINDOW_LEAD_HOURS = 24.0
POST_WINDOW_HOURS = 24.0
UNSTARTED_POST_GRACE_HOURS = 48.0
UNLOCK_REOPEN_HOURS = 24.0

# Training load
ACUTE_DAYS = 7
CHRONIC_DAYS = 28
ACWR_LOWER = 0.8
ACWR_UPPER = 1.5
RECENT_INJURY_DAYS = 30

# Snapshot
ENGAGEMENT_ACTIVE_RATE = 0.9
ENGAGEMENT_PARTIAL_RATE = 0.5
DEVIATION_ALERT_PCT = 15.0
RESPONSE_RATE_THRESHOLD = 0.7
SOURCE_TIMEOUT_SECONDS = 5.0

# Athlete wellness summary
WELLNESS_SUMMARY_DAYS = 28
HIGH_FATIGUE_LEVEL = 8
HIGH_STRESS_LEVEL = 8
LOW_READINESS_LEVEL = 3
