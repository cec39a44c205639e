"""
Monitoring service.

Loads roster and load data from the database and hands it to the pure
load and eligibility classifiers.
"""

import datetime
from typing import Optional, Sequence

from sqlmodel import Session

from app.core.clock import Clock, system_clock
from app.core.errors import NotFoundError
from app.db.repositories.athlete import AthleteRepository
from app.db.repositories.load_sample import LoadSampleRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.wellness import WellnessRepository
from app.models.athlete import Athlete
from app.models.load_sample import LoadSample
from app.monitoring.config import DEFAULT_CONFIG, MonitoringConfig
from app.monitoring.eligibility import DEFAULT_CATEGORY_TABLE, compute_eligibility
from app.monitoring.load import compute_load
from app.schemas.eligibility import AthleteProfile, AthleteState, CategoryBracket, EligibilityResult
from app.schemas.load import LoadResult, LoadSampleData

RESPONSE_RATE_DAYS = 30


def to_profile(athlete: Athlete) -> AthleteProfile:
    return AthleteProfile(
        id=athlete.id,
        name=athlete.full_name,
        birth_date=athlete.birth_date,
        state=AthleteState(athlete.state),
        injured=athlete.injured,
        medical_restriction=athlete.medical_restriction,
        suspended_until=athlete.suspended_until,
        load_restricted=athlete.load_restricted,
        last_injury_date=athlete.last_injury_date,
    )


def to_sample(sample: LoadSample) -> LoadSampleData:
    return LoadSampleData(athlete_id=sample.athlete_id, date=sample.date, internal_load=sample.internal_load)


class MonitoringService:
    """Per-athlete load and eligibility, plus the team response rate."""

    def __init__(self, session: Session, clock: Clock = system_clock, config: Optional[MonitoringConfig] = None,
                 category_table: Sequence[CategoryBracket] = DEFAULT_CATEGORY_TABLE, ):
        self.athletes = AthleteRepository(session)
        self.samples = LoadSampleRepository(session)
        self.sessions = TrainingSessionRepository(session)
        self.wellness = WellnessRepository(session)
        self.clock = clock
        self.config = config or DEFAULT_CONFIG
        self.category_table = category_table

    def compute_load(self, athlete_id: int, as_of: Optional[datetime.date] = None) -> LoadResult:
        self._get_athlete(athlete_id)
        ref_date = as_of or self.clock().date()
        start = ref_date - datetime.timedelta(days=self.config.load.chronic_days - 1)
        samples = [to_sample(s) for s in self.samples.get_range([athlete_id], start, ref_date)]
        return compute_load(athlete_id, ref_date, samples, self.config.load)

    def compute_eligibility(self, athlete_id: int, as_of: Optional[datetime.date] = None) -> EligibilityResult:
        athlete = self._get_athlete(athlete_id)
        ref_date = as_of or self.clock().date()
        return compute_eligibility(to_profile(athlete), ref_date, self.category_table)

    def team_response_rate(self, team_id: int, as_of: datetime.date, days: int = RESPONSE_RATE_DAYS) -> Optional[float]:
        """Share of (athlete, session) pairs over the trailing *days* with both submissions.

        Only sessions that have already started count.  ``None`` when there
        is nothing to measure.
        """
        end = min(datetime.datetime.combine(as_of, datetime.time.max), self.clock())
        start = datetime.datetime.combine(as_of - datetime.timedelta(days=days - 1), datetime.time.min)
        sessions = self.sessions.get_by_team_between(team_id, start, end)
        roster_ids = {a.id for a in self.athletes.get_roster(team_id)}
        if not sessions or not roster_ids:
            return None

        kinds_by_pair: dict[tuple[int, int], set[str]] = {}
        for submission in self.wellness.get_by_sessions([s.id for s in sessions]):
            if submission.athlete_id in roster_ids:
                kinds_by_pair.setdefault((submission.athlete_id, submission.session_id), set()).add(submission.kind)

        complete = sum(1 for kinds in kinds_by_pair.values() if {"pre", "post"} <= kinds)
        return complete / (len(sessions) * len(roster_ids))

    def _get_athlete(self, athlete_id: int) -> Athlete:
        athlete = self.athletes.get_by_id(athlete_id)
        if not athlete:
            raise NotFoundError(f"Athlete {athlete_id} not found")
        return athlete
