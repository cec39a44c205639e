"""
Wellness service.

Submission, edit and unlock workflow for pre/post wellness reports.
Every deadline decision goes through :func:`resolve_window` with the
service clock; nothing here reads the wall clock directly.
"""

import datetime
from typing import Iterable, Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from app.core.clock import Clock, system_clock
from app.core.errors import ConflictError, NotFoundError, ValidationError, WindowExpiredError
from app.core.thresholds import (HIGH_FATIGUE_LEVEL, HIGH_STRESS_LEVEL, LOW_READINESS_LEVEL,
                                 WELLNESS_SUMMARY_DAYS, )
from app.db.repositories.athlete import AthleteRepository
from app.db.repositories.load_sample import LoadSampleRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.wellness import WellnessRepository, WellnessUnlockRepository
from app.models.athlete import Athlete
from app.models.training_session import TrainingSession
from app.models.wellness import WellnessSubmission, WellnessUnlock
from app.monitoring.config import DEFAULT_CONFIG, MonitoringConfig
from app.monitoring.load import internal_load
from app.monitoring.window import UnlockEvent, decision_event, next_unlock_state, resolve_window, source_states
from app.schemas.wellness import (AthleteWellnessSummary, SessionWellnessStatus, WellnessPostValues, WellnessPreValues,
                                  WellnessSubmissionResponse, )
from app.schemas.window import UnlockDecision, UnlockState, UnlockStatus, WindowKind, WindowState

_VALUE_SCHEMAS = {
    WindowKind.PRE: WellnessPreValues,
    WindowKind.POST: WellnessPostValues,
}

_DECIDED_STATES = (UnlockState.UNLOCKED, UnlockState.DENIED)


def unlock_request_path(kind: WindowKind, session_id: int, athlete_id: int) -> str:
    return f"/api/v1/wellness/{kind.value}/sessions/{session_id}/athletes/{athlete_id}/unlock-request"


def _mean(values: Iterable[Optional[float]]) -> Optional[float]:
    present = [v for v in values if v is not None]
    return round(sum(present) / len(present), 2) if present else None


class WellnessService:
    """Service for wellness submission business logic."""

    def __init__(self, session: Session, clock: Clock = system_clock, config: Optional[MonitoringConfig] = None):
        self.repository = WellnessRepository(session)
        self.unlocks = WellnessUnlockRepository(session)
        self.sessions = TrainingSessionRepository(session)
        self.athletes = AthleteRepository(session)
        self.samples = LoadSampleRepository(session)
        self.clock = clock
        self.config = config or DEFAULT_CONFIG

    # ------------------------------------------------------------------
    # Windows
    # ------------------------------------------------------------------

    def get_window(self, kind: WindowKind, session_id: int, athlete_id: int) -> WindowState:
        training = self._get_session(session_id)
        self._get_athlete(athlete_id, training)
        return self._resolve(kind, training, athlete_id, self.clock())

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def submit(self, kind: WindowKind, session_id: int, athlete_id: int, values: dict) -> WellnessSubmissionResponse:
        ratings = self._validate_values(kind, values)
        training = self._get_session(session_id)
        self._get_athlete(athlete_id, training)

        existing = self.repository.get(athlete_id, session_id, kind.value)
        if existing:
            raise ConflictError(f"A {kind.value} wellness submission already exists for this session",
                                existing=self._to_response(existing))

        now = self.clock()
        self._ensure_writable(kind, training, athlete_id, now)

        entry = WellnessSubmission(athlete_id=athlete_id, session_id=session_id, kind=kind.value,
                                   ratings=ratings.model_dump(exclude_none=True), created_at=now, updated_at=now, )
        self._apply_load(entry, ratings, training)

        entry, created = self.repository.create(entry)
        if not created:
            raise ConflictError(f"A {kind.value} wellness submission already exists for this session",
                                existing=self._to_response(entry))

        if kind is WindowKind.POST:
            self._refresh_load_sample(athlete_id, training)
        logger.info(f"Wellness {kind.value} recorded for athlete {athlete_id} in session {session_id}")
        return self._to_response(entry)

    def update(self, kind: WindowKind, session_id: int, athlete_id: int, values: dict) -> WellnessSubmissionResponse:
        ratings = self._validate_values(kind, values)
        training = self._get_session(session_id)
        self._get_athlete(athlete_id, training)

        entry = self.repository.get(athlete_id, session_id, kind.value)
        if not entry:
            raise NotFoundError(f"No {kind.value} wellness submission to update for this session")

        now = self.clock()
        self._ensure_writable(kind, training, athlete_id, now)

        entry.ratings = ratings.model_dump(exclude_none=True)
        self._apply_load(entry, ratings, training)
        entry.updated_at = now
        entry = self.repository.update(entry)

        if kind is WindowKind.POST:
            self._refresh_load_sample(athlete_id, training)
        return self._to_response(entry)

    def session_status(self, session_id: int) -> SessionWellnessStatus:
        training = self._get_session(session_id)
        roster_ids = [a.id for a in self.athletes.get_roster(training.team_id)]
        submissions = self.repository.get_by_session(session_id, roster_ids)

        responded = {kind: {s.athlete_id for s in submissions if s.kind == kind.value} for kind in WindowKind}
        total = len(roster_ids)

        def _rate(count: int) -> float:
            return round(count / total * 100, 1) if total else 0.0

        return SessionWellnessStatus(
            session_id=session_id,
            total_athletes=total,
            responded_pre=len(responded[WindowKind.PRE]),
            responded_post=len(responded[WindowKind.POST]),
            pending_pre=[i for i in roster_ids if i not in responded[WindowKind.PRE]],
            pending_post=[i for i in roster_ids if i not in responded[WindowKind.POST]],
            response_rate_pre=_rate(len(responded[WindowKind.PRE])),
            response_rate_post=_rate(len(responded[WindowKind.POST])),
        )

    def athlete_summary(self, athlete_id: int, days: int = WELLNESS_SUMMARY_DAYS) -> AthleteWellnessSummary:
        """Wellness averages and response counts over the trailing *days*.

        Only sessions of the athlete's team that have already started count.
        ``response_rate`` is the share of those sessions with both a pre and
        a post report.
        """
        if days < 1:
            raise ValidationError(f"days must be >= 1, got {days}")
        athlete = self.athletes.get_by_id(athlete_id)
        if not athlete:
            raise NotFoundError(f"Athlete {athlete_id} not found")

        now = self.clock()
        sessions = self.sessions.get_by_team_between(athlete.team_id, now - datetime.timedelta(days=days), now)
        submissions = self.repository.get_by_athlete(athlete_id, [s.id for s in sessions])
        pre = [s for s in submissions if s.kind == WindowKind.PRE.value]
        post = [s for s in submissions if s.kind == WindowKind.POST.value]
        complete = {s.session_id for s in pre} & {s.session_id for s in post}

        def _avg(field: str) -> Optional[float]:
            return _mean(s.ratings.get(field) for s in pre)

        def _count(predicate) -> int:
            return sum(1 for s in pre if predicate(s.ratings))

        return AthleteWellnessSummary(
            athlete_id=athlete_id,
            period_days=days,
            avg_sleep_quality=_avg("sleep_quality"),
            avg_fatigue_level=_avg("fatigue_level"),
            avg_stress_level=_avg("stress_level"),
            avg_muscle_soreness=_avg("muscle_soreness"),
            avg_mood=_avg("mood"),
            avg_readiness=_avg("readiness"),
            avg_session_rpe=_mean(s.ratings.get("session_rpe") for s in post),
            avg_internal_load=_mean(s.internal_load for s in post),
            total_sessions=len(sessions),
            responded_pre=len(pre),
            responded_post=len(post),
            response_rate=round(len(complete) / len(sessions) * 100, 1) if sessions else 0.0,
            high_fatigue_days=_count(lambda r: r.get("fatigue_level", 0) >= HIGH_FATIGUE_LEVEL),
            high_stress_days=_count(lambda r: r.get("stress_level", 0) >= HIGH_STRESS_LEVEL),
            low_readiness_days=_count(lambda r: r.get("readiness", 10) <= LOW_READINESS_LEVEL),
        )

    # ------------------------------------------------------------------
    # Unlock workflow
    # ------------------------------------------------------------------

    def request_unlock(self, kind: WindowKind, session_id: int, athlete_id: int,
                       reason: Optional[str] = None) -> UnlockStatus:
        """Athlete asks to reopen an expired window.  Idempotent while pending."""
        training = self._get_session(session_id)
        self._get_athlete(athlete_id, training)
        now = self.clock()

        window = self._resolve(kind, training, athlete_id, now)
        if not window.is_expired:
            raise ValidationError("The submission window is still open; no unlock needed",
                                  window=window.model_dump(mode="json"))

        unlock = self.unlocks.get(athlete_id, session_id, kind.value)
        if unlock is None:
            target = next_unlock_state(UnlockState.LOCKED, UnlockEvent.REQUEST)
            unlock, created = self.unlocks.create(WellnessUnlock(
                athlete_id=athlete_id, session_id=session_id, kind=kind.value, state=target.value, reason=reason,
                requested_at=now,
            ))
            if created:
                logger.info(f"Unlock requested: athlete {athlete_id}, session {session_id}, {kind.value}")
            else:
                logger.debug(f"Concurrent unlock request lost for athlete {athlete_id}, session {session_id}")
            return self._to_unlock_status(unlock)

        current = UnlockState(unlock.state)
        target = next_unlock_state(current, UnlockEvent.REQUEST)
        if target is current:
            return self._to_unlock_status(unlock)

        from_states = [s.value for s in source_states(UnlockEvent.REQUEST) if s is not target]
        won = self.unlocks.transition(unlock.id, from_states, target.value, reason=reason, requested_at=now,
                                      resolved_at=None, resolved_by=None, )
        if won:
            logger.info(f"Unlock re-requested: athlete {athlete_id}, session {session_id}, {kind.value}")
        return self._to_unlock_status(self.unlocks.get(athlete_id, session_id, kind.value))

    def resolve_unlock(self, kind: WindowKind, session_id: int, athlete_id: int, decision: UnlockDecision,
                       resolved_by: Optional[str] = None) -> UnlockStatus:
        """Coach approves or denies a pending unlock request.

        Approval reopens the window from now.  When two decisions race, one
        wins and the other returns the state it produced, whether it lost
        the conditional update or read the record after the winner committed.

        Raises:
            InvalidTransitionError: there is no pending or decided request.
        """
        training = self._get_session(session_id)
        self._get_athlete(athlete_id, training)
        now = self.clock()

        unlock = self.unlocks.get(athlete_id, session_id, kind.value)
        current = UnlockState(unlock.state) if unlock else UnlockState.LOCKED
        if current in _DECIDED_STATES:
            logger.debug(f"Unlock already {current.value} for athlete {athlete_id}, session {session_id}; "
                         f"ignoring {decision.value}")
            return self._to_unlock_status(unlock)
        event = decision_event(decision)
        target = next_unlock_state(current, event)

        won = self.unlocks.transition(unlock.id, [s.value for s in source_states(event)], target.value,
                                      resolved_at=now, resolved_by=resolved_by, )
        refreshed = self.unlocks.get(athlete_id, session_id, kind.value)
        if won:
            logger.info(f"Unlock {target.value}: athlete {athlete_id}, session {session_id}, {kind.value}"
                        f" by {resolved_by or 'staff'}")
        else:
            logger.debug(f"Unlock decision lost the race; state is now {refreshed.state}")
        return self._to_unlock_status(refreshed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_session(self, session_id: int) -> TrainingSession:
        training = self.sessions.get_by_id(session_id)
        if not training:
            raise NotFoundError(f"Training session {session_id} not found")
        return training

    def _get_athlete(self, athlete_id: int, training: TrainingSession) -> Athlete:
        athlete = self.athletes.get_by_id(athlete_id)
        if not athlete or athlete.team_id != training.team_id:
            raise NotFoundError(f"Athlete {athlete_id} not found on the roster of session {training.id}")
        return athlete

    def _resolve(self, kind: WindowKind, training: TrainingSession, athlete_id: int,
                 now: datetime.datetime) -> WindowState:
        existing = self.repository.get(athlete_id, training.id, kind.value)
        unlock = self.unlocks.get(athlete_id, training.id, kind.value)
        unlock_state = UnlockState(unlock.state) if unlock else None
        return resolve_window(
            kind, training.scheduled_start, existing.created_at if existing else None, now,
            planned_duration_minutes=training.planned_duration_minutes, unlock_state=unlock_state,
            unlocked_at=unlock.resolved_at if unlock_state is UnlockState.UNLOCKED else None,
            config=self.config.window,
        )

    def _ensure_writable(self, kind: WindowKind, training: TrainingSession, athlete_id: int,
                         now: datetime.datetime) -> None:
        window = self._resolve(kind, training, athlete_id, now)
        if window.is_expired:
            logger.info(f"Rejected {kind.value} wellness for athlete {athlete_id}: window closed at {window.closes_at}")
            raise WindowExpiredError(f"The {kind.value} wellness window closed at {window.closes_at.isoformat()}",
                                     window=window, unlock_request=unlock_request_path(kind, training.id, athlete_id))
        if not window.is_open:
            raise ValidationError(f"The {kind.value} wellness window opens at {window.opens_at.isoformat()}",
                                  window=window.model_dump(mode="json"))

    @staticmethod
    def _validate_values(kind: WindowKind, values: dict):
        try:
            return _VALUE_SCHEMAS[kind](**values)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {kind.value} wellness values",
                                  errors=e.errors(include_url=False, include_context=False)) from e

    @staticmethod
    def _apply_load(entry: WellnessSubmission, ratings, training: TrainingSession) -> None:
        if not isinstance(ratings, WellnessPostValues):
            return
        minutes = ratings.minutes_effective
        if minutes is None:
            minutes = training.actual_duration_minutes or training.planned_duration_minutes
        entry.minutes_effective = minutes
        entry.internal_load = internal_load(ratings.session_rpe, minutes)

    def _refresh_load_sample(self, athlete_id: int, training: TrainingSession) -> None:
        day = training.scheduled_start.date()
        total = self.samples.sum_post_loads_for_day(athlete_id, day)
        self.samples.upsert(athlete_id, day, total)

    @staticmethod
    def _to_response(entry: WellnessSubmission) -> WellnessSubmissionResponse:
        return WellnessSubmissionResponse(id=entry.id, athlete_id=entry.athlete_id, session_id=entry.session_id,
                                          kind=WindowKind(entry.kind), ratings=entry.ratings,
                                          internal_load=entry.internal_load, minutes_effective=entry.minutes_effective,
                                          created_at=entry.created_at, updated_at=entry.updated_at, )

    @staticmethod
    def _to_unlock_status(unlock: WellnessUnlock) -> UnlockStatus:
        return UnlockStatus(athlete_id=unlock.athlete_id, session_id=unlock.session_id, kind=WindowKind(unlock.kind),
                            state=UnlockState(unlock.state), reason=unlock.reason, requested_at=unlock.requested_at,
                            resolved_at=unlock.resolved_at, resolved_by=unlock.resolved_by, )
