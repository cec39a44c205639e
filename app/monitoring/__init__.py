"""Monitoring core: submission windows, ACWR, eligibility, status and snapshots."""

from app.monitoring.config import DEFAULT_CONFIG, MonitoringConfig
from app.monitoring.eligibility import DEFAULT_CATEGORY_TABLE, compute_eligibility, validate_category_table
from app.monitoring.load import compute_load, internal_load
from app.monitoring.snapshot import SnapshotSources, build_snapshot
from app.monitoring.window import next_unlock_state, resolve_window

__all__ = [
    "DEFAULT_CONFIG",
    "MonitoringConfig",
    "DEFAULT_CATEGORY_TABLE",
    "compute_eligibility",
    "validate_category_table",
    "compute_load",
    "internal_load",
    "SnapshotSources",
    "build_snapshot",
    "next_unlock_state",
    "resolve_window",
]
