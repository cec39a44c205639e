"""
Session snapshot aggregator.

Builds the per-session operational view for coaching staff:

1. Load the session and its roster (a missing session is a
   :class:`NotFoundError`; a roster entry without ``birth_date`` is a
   :class:`ValidationError`, raised before any fan-out).
2. Fan out the independent reads (attendance, wellness completeness,
   load samples, plus the team's monthly response rate) concurrently,
   each under its own timeout.
3. Fan in: a failed or timed-out source becomes absent fields plus a
   ``data_incomplete`` marker, never an aborted snapshot.
4. Derive every athlete row once (eligibility, load status, overall
   status), sort, summarise, and generate alerts from the rows.

Cancelling the caller cancels every outstanding read and returns nothing.
The three classifiers are pure; only this module awaits I/O.
"""

from __future__ import annotations

import asyncio
import datetime
import time
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, Protocol, Sequence, TypeVar

from loguru import logger

from app.core.clock import Clock, system_clock
from app.core.errors import PartialDataError, ValidationError
from app.monitoring.alerts import generate_alerts
from app.monitoring.config import DEFAULT_CONFIG, MonitoringConfig, SnapshotConfig
from app.monitoring.eligibility import DEFAULT_CATEGORY_TABLE, compute_eligibility, has_recent_injury
from app.monitoring.load import compute_load, deviation_pct, out_of_zone_count, team_baseline
from app.monitoring.status import AthleteSignals, classify_load_status, classify_overall, sort_roster
from app.schemas.eligibility import AthleteProfile, CategoryBracket
from app.schemas.load import LoadResult, LoadSampleData
from app.schemas.snapshot import (AthleteStatusRow, LoadSummary, OverallStatus, PresenceStatus, ProcessStatus,
                                  SessionContext, SessionInfo, SessionPhase, SessionSnapshot, WellnessPresence,
                                  WellnessStatus, )

ATTENDANCE = "attendance"
WELLNESS = "wellness"
LOAD = "load"
RESPONSE_RATE = "response_rate"

T = TypeVar("T")


class SnapshotSources(Protocol):
    """Async read-only access to the upstream stores."""

    async def get_session(self, session_id: int) -> SessionInfo:
        """Raise :class:`NotFoundError` if the session does not exist."""

    async def get_roster(self, session: SessionInfo) -> list[AthleteProfile]:
        ...

    async def get_attendance(self, session: SessionInfo, athlete_ids: Sequence[int]) -> dict[int, PresenceStatus]:
        ...

    async def get_wellness(self, session: SessionInfo, athlete_ids: Sequence[int]) -> dict[int, WellnessPresence]:
        ...

    async def get_load_samples(self, athlete_ids: Sequence[int], start: datetime.date,
                               end: datetime.date) -> list[LoadSampleData]:
        ...

    async def get_response_rate(self, team_id: int, as_of: datetime.date) -> Optional[float]:
        ...


# ======================================================================
# Fan-out / fan-in
# ======================================================================


@dataclass
class SourceResult(Generic[T]):
    name: str
    value: Optional[T] = None
    error: Optional[PartialDataError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _guarded(name: str, read: Awaitable[T], timeout: float) -> SourceResult[T]:
    """Await one source under its own timeout; failures become a :class:`PartialDataError`.

    Cancellation is not caught: it propagates to the caller.
    """
    try:
        value = await asyncio.wait_for(read, timeout=timeout)
    except Exception as exc:
        error = PartialDataError(name, exc)
        logger.warning(f"Snapshot source unavailable: {error.message}")
        return SourceResult(name, error=error)
    return SourceResult(name, value=value)


# ======================================================================
# Derivation helpers
# ======================================================================


def _session_phase(session: SessionInfo, now: datetime.datetime) -> SessionPhase:
    if now < session.scheduled_start:
        return SessionPhase.SCHEDULED
    if now < session.expected_end:
        return SessionPhase.ONGOING
    return SessionPhase.COMPLETED


def _engagement_status(rate: float, cfg: SnapshotConfig) -> str:
    if rate >= cfg.engagement_active_rate:
        return "active"
    if rate >= cfg.engagement_partial_rate:
        return "partial"
    return "inactive"


def _validate_roster(roster: Sequence[AthleteProfile]) -> None:
    missing = [a.id for a in roster if a.birth_date is None]
    if missing:
        raise ValidationError(f"Roster athletes without birth_date: {missing}", athlete_ids=missing)


def _session_day_loads(samples: Sequence[LoadSampleData], day: datetime.date) -> dict[int, float]:
    loads: dict[int, float] = {}
    for sample in samples:
        if sample.date == day:
            loads[sample.athlete_id] = loads.get(sample.athlete_id, 0.0) + sample.internal_load
    return loads


def _build_row(athlete: AthleteProfile, session_date: datetime.date, presence: Optional[PresenceStatus],
               wellness: Optional[WellnessPresence], load: Optional[LoadResult], cfg: MonitoringConfig,
               table: Sequence[CategoryBracket], ) -> AthleteStatusRow:
    eligibility = compute_eligibility(athlete, session_date, table)

    wellness_status = None
    if wellness is not None:
        wellness_status = WellnessStatus.OK if wellness.complete else WellnessStatus.PENDING

    injury_flag = athlete.injured or has_recent_injury(athlete, session_date, cfg.load.recent_injury_days)
    load_status = classify_load_status(load, injury_flag)
    verdict = classify_overall(AthleteSignals(
        hard_blocks=len(eligibility.reasons), load_status=load_status, wellness=wellness_status,
    ))

    return AthleteStatusRow(
        athlete_id=athlete.id,
        name=athlete.name,
        presence=presence,
        wellness=wellness_status,
        has_pre=wellness.has_pre if wellness is not None else None,
        has_post=wellness.has_post if wellness is not None else None,
        acwr=load.acwr if load is not None else None,
        zone=load.zone if load is not None else None,
        load_status=load_status,
        natural_category=eligibility.natural_category,
        can_play_today=eligibility.can_play_today,
        reasons=eligibility.reasons,
        warnings=eligibility.warnings,
        overall_status=verdict.status,
        status_rules=list(verdict.rules),
    )


def _process_status(rows: Sequence[AthleteStatusRow], attendance_ok: bool, wellness_ok: bool,
                    cfg: SnapshotConfig, ) -> ProcessStatus:
    total = len(rows)
    status = ProcessStatus(
        total_athletes=total,
        session_risk=any(r.overall_status is OverallStatus.CRITICAL for r in rows),
    )
    if attendance_ok:
        status.present = sum(1 for r in rows if r.presence is PresenceStatus.PRESENT)
        status.absent = total - status.present
    if wellness_ok:
        complete = sum(1 for r in rows if r.wellness is WellnessStatus.OK)
        status.wellness_pending = total - complete
        status.engagement_rate = round(complete / total, 4) if total else 0.0
        status.engagement_status = _engagement_status(status.engagement_rate, cfg)
    return status


def _load_summary(rows: Sequence[AthleteStatusRow], results: Sequence[LoadResult],
                  samples: Sequence[LoadSampleData], session_date: datetime.date, attendance_ok: bool, ) -> LoadSummary:
    baseline = team_baseline(results)
    baseline_avg = round(baseline, 2) if baseline is not None else None

    session_avg = None
    if attendance_ok:
        present_ids = [r.athlete_id for r in rows if r.presence is PresenceStatus.PRESENT]
        if present_ids:
            day_loads = _session_day_loads(samples, session_date)
            session_avg = round(sum(day_loads.get(i, 0.0) for i in present_ids) / len(present_ids), 2)

    return LoadSummary(
        session_load_avg=session_avg,
        team_baseline_avg=baseline_avg,
        deviation_pct=deviation_pct(session_avg, baseline_avg),
        out_of_zone_athletes=out_of_zone_count(results),
    )


# ======================================================================
# Main entry point
# ======================================================================


async def build_snapshot(session_id: int, sources: SnapshotSources, *, clock: Clock = system_clock,
                         config: Optional[MonitoringConfig] = None,
                         category_table: Sequence[CategoryBracket] = DEFAULT_CATEGORY_TABLE, ) -> SessionSnapshot:
    """Build the operational snapshot of one training session.

    Args:
        session_id: Session to describe.
        sources: Upstream readers.
        clock: Time source for ``generated_at`` and the session phase.
        config: Optional :class:`MonitoringConfig` override.
        category_table: Validated category age-bracket table.

    Returns:
        :class:`SessionSnapshot`, flagged ``data_incomplete`` if any source failed.

    Raises:
        NotFoundError: unknown session.
        ValidationError: roster athlete without ``birth_date``.
    """
    cfg = config or DEFAULT_CONFIG
    started = time.perf_counter()
    logger.info(f"Building snapshot for session {session_id}")

    session = await sources.get_session(session_id)
    roster = await sources.get_roster(session)
    _validate_roster(roster)

    athlete_ids = [a.id for a in roster]
    session_date = session.scheduled_start.date()
    load_start = session_date - datetime.timedelta(days=cfg.load.chronic_days - 1)
    timeout = cfg.snapshot.source_timeout_seconds

    attendance, wellness, load, rate = await asyncio.gather(
        _guarded(ATTENDANCE, sources.get_attendance(session, athlete_ids), timeout),
        _guarded(WELLNESS, sources.get_wellness(session, athlete_ids), timeout),
        _guarded(LOAD, sources.get_load_samples(athlete_ids, load_start, session_date), timeout),
        _guarded(RESPONSE_RATE, sources.get_response_rate(session.team_id, session_date), timeout),
    )
    missing = [r.name for r in (attendance, wellness, load) if not r.ok]

    samples: list[LoadSampleData] = list(load.value or []) if load.ok else []
    load_results: dict[int, LoadResult] = {}
    if load.ok:
        load_results = {aid: compute_load(aid, session_date, samples, cfg.load) for aid in athlete_ids}

    rows: list[AthleteStatusRow] = []
    for athlete in roster:
        presence: Optional[PresenceStatus] = None
        if attendance.ok:
            presence = (attendance.value or {}).get(athlete.id, PresenceStatus.ABSENT)
        athlete_wellness: Optional[WellnessPresence] = None
        if wellness.ok:
            athlete_wellness = (wellness.value or {}).get(athlete.id, WellnessPresence())
        rows.append(_build_row(athlete, session_date, presence, athlete_wellness, load_results.get(athlete.id),
                               cfg, category_table))
    rows = sort_roster(rows)

    process_status = _process_status(rows, attendance.ok, wellness.ok, cfg.snapshot)
    load_summary = LoadSummary()
    if load.ok:
        load_summary = _load_summary(rows, list(load_results.values()), samples, session_date, attendance.ok)

    alerts = generate_alerts(rows, load_summary, response_rate=rate.value if rate.ok else None,
                             missing_sources=missing, config=cfg.snapshot)

    now = clock()
    snapshot = SessionSnapshot(
        context=SessionContext(
            session_id=session.id,
            team_id=session.team_id,
            date=session_date,
            scheduled_start=session.scheduled_start,
            planned_duration_minutes=session.planned_duration_minutes,
            status=_session_phase(session, now),
        ),
        process_status=process_status,
        load_summary=load_summary,
        athletes=rows,
        alerts=alerts,
        data_incomplete=bool(missing),
        missing_sources=missing,
        generated_at=now,
    )

    elapsed_ms = (time.perf_counter() - started) * 1000
    if missing:
        logger.warning(f"Snapshot for session {session_id} is incomplete (missing: {', '.join(missing)}) "
                       f"in {elapsed_ms:.0f} ms")
    else:
        logger.info(f"Snapshot for session {session_id} built in {elapsed_ms:.0f} ms "
                    f"({len(rows)} athletes, {len(alerts)} alerts)")
    return snapshot

