"""
Database-backed snapshot sources.

Each read opens its own :class:`Session` and runs in a worker thread, so
the snapshot aggregator can await them concurrently.
"""

import asyncio
import datetime
from typing import Optional, Sequence

from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.core.clock import Clock, system_clock
from app.core.errors import NotFoundError
from app.db.repositories.athlete import AthleteRepository
from app.db.repositories.attendance import AttendanceRepository
from app.db.repositories.load_sample import LoadSampleRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.wellness import WellnessRepository
from app.schemas.eligibility import AthleteProfile
from app.schemas.load import LoadSampleData
from app.schemas.snapshot import PresenceStatus, SessionInfo, WellnessPresence
from app.services.monitoring_service import MonitoringService, to_profile, to_sample


class DatabaseSnapshotSources:
    """:class:`~app.monitoring.snapshot.SnapshotSources` over the application database."""

    def __init__(self, engine: Engine, clock: Clock = system_clock):
        self.engine = engine
        self.clock = clock

    async def get_session(self, session_id: int) -> SessionInfo:
        return await asyncio.to_thread(self._read_session, session_id)

    async def get_roster(self, session: SessionInfo) -> list[AthleteProfile]:
        return await asyncio.to_thread(self._read_roster, session.team_id)

    async def get_attendance(self, session: SessionInfo, athlete_ids: Sequence[int]) -> dict[int, PresenceStatus]:
        return await asyncio.to_thread(self._read_attendance, session.id, list(athlete_ids))

    async def get_wellness(self, session: SessionInfo, athlete_ids: Sequence[int]) -> dict[int, WellnessPresence]:
        return await asyncio.to_thread(self._read_wellness, session.id, list(athlete_ids))

    async def get_load_samples(self, athlete_ids: Sequence[int], start: datetime.date,
                               end: datetime.date) -> list[LoadSampleData]:
        return await asyncio.to_thread(self._read_load_samples, list(athlete_ids), start, end)

    async def get_response_rate(self, team_id: int, as_of: datetime.date) -> Optional[float]:
        return await asyncio.to_thread(self._read_response_rate, team_id, as_of)

    # ------------------------------------------------------------------
    # Blocking reads
    # ------------------------------------------------------------------

    def _read_session(self, session_id: int) -> SessionInfo:
        with Session(self.engine) as db:
            training = TrainingSessionRepository(db).get_by_id(session_id)
            if not training:
                raise NotFoundError(f"Training session {session_id} not found")
            return SessionInfo(id=training.id, team_id=training.team_id, scheduled_start=training.scheduled_start,
                               planned_duration_minutes=training.planned_duration_minutes, )

    def _read_roster(self, team_id: int) -> list[AthleteProfile]:
        with Session(self.engine) as db:
            return [to_profile(a) for a in AthleteRepository(db).get_roster(team_id)]

    def _read_attendance(self, session_id: int, athlete_ids: list[int]) -> dict[int, PresenceStatus]:
        with Session(self.engine) as db:
            records = AttendanceRepository(db).get_by_session(session_id, athlete_ids)
            return {r.athlete_id: PresenceStatus(r.presence_status) for r in records}

    def _read_wellness(self, session_id: int, athlete_ids: list[int]) -> dict[int, WellnessPresence]:
        with Session(self.engine) as db:
            submissions = WellnessRepository(db).get_by_session(session_id, athlete_ids)
        presence = {athlete_id: WellnessPresence() for athlete_id in athlete_ids}
        for submission in submissions:
            if submission.kind == "pre":
                presence[submission.athlete_id].has_pre = True
            elif submission.kind == "post":
                presence[submission.athlete_id].has_post = True
        return presence

    def _read_load_samples(self, athlete_ids: list[int], start: datetime.date,
                           end: datetime.date) -> list[LoadSampleData]:
        with Session(self.engine) as db:
            return [to_sample(s) for s in LoadSampleRepository(db).get_range(athlete_ids, start, end)]

    def _read_response_rate(self, team_id: int, as_of: datetime.date) -> Optional[float]:
        with Session(self.engine) as db:
            return MonitoringService(db, clock=self.clock).team_response_rate(team_id, as_of)
