"""
Shared API dependencies.

Reusable FastAPI dependencies for the clock, engine configuration and
service construction.  Tests override these through
``app.dependency_overrides``.
"""

from typing import Sequence

from fastapi import Depends
from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.core.clock import Clock, system_clock
from app.core.config import settings
from app.db.session import get_db, get_engine
from app.monitoring.config import MonitoringConfig
from app.monitoring.eligibility import DEFAULT_CATEGORY_TABLE
from app.schemas.eligibility import CategoryBracket
from app.services.monitoring_service import MonitoringService
from app.services.snapshot_sources import DatabaseSnapshotSources
from app.services.wellness_service import WellnessService

_MONITORING_CONFIG = MonitoringConfig.from_settings(settings)


def get_clock() -> Clock:
    return system_clock


def get_monitoring_config() -> MonitoringConfig:
    return _MONITORING_CONFIG


def get_category_table() -> Sequence[CategoryBracket]:
    return DEFAULT_CATEGORY_TABLE


def get_wellness_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock),
                         config: MonitoringConfig = Depends(get_monitoring_config), ) -> WellnessService:
    return WellnessService(db, clock=clock, config=config)


def get_monitoring_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock),
                           config: MonitoringConfig = Depends(get_monitoring_config),
                           table: Sequence[CategoryBracket] = Depends(get_category_table), ) -> MonitoringService:
    return MonitoringService(db, clock=clock, config=config, category_table=table)


def get_snapshot_sources(engine: Engine = Depends(get_engine),
                         clock: Clock = Depends(get_clock), ) -> DatabaseSnapshotSources:
    return DatabaseSnapshotSources(engine, clock=clock)
