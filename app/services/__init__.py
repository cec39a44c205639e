"""Business logic services."""

from app.services.monitoring_service import MonitoringService
from app.services.snapshot_sources import DatabaseSnapshotSources
from app.services.wellness_service import WellnessService

__all__ = [
    "MonitoringService",
    "DatabaseSnapshotSources",
    "WellnessService",
]
