"""
Training session endpoints: the operational snapshot.
"""

from typing import Sequence

from fastapi import APIRouter, Depends

from app.api.dependencies import get_category_table, get_clock, get_monitoring_config, get_snapshot_sources
from app.core.clock import Clock
from app.monitoring.config import MonitoringConfig
from app.monitoring.snapshot import SnapshotSources, build_snapshot
from app.schemas.eligibility import CategoryBracket
from app.schemas.snapshot import SessionSnapshot

router = APIRouter()


@router.get("/{session_id}/snapshot", summary="Build the staff snapshot for a session.",
            response_model=SessionSnapshot, )
async def get_snapshot(session_id: int, sources: SnapshotSources = Depends(get_snapshot_sources),
                       clock: Clock = Depends(get_clock), config: MonitoringConfig = Depends(get_monitoring_config),
                       table: Sequence[CategoryBracket] = Depends(get_category_table), ):
    return await build_snapshot(session_id, sources, clock=clock, config=config, category_table=table)
