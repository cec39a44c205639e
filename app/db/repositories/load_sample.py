"""
Load sample repository.

Daily internal-load aggregates used by the ACWR computation.
"""

import datetime
from typing import Sequence

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.load_sample import LoadSample
from app.models.training_session import TrainingSession
from app.models.wellness import WellnessSubmission


class LoadSampleRepository:
    """Repository for LoadSample database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_range(self, athlete_ids: Sequence[int], start: datetime.date, end: datetime.date, ) -> list[LoadSample]:
        if not athlete_ids:
            return []
        statement = (select(LoadSample).where(LoadSample.athlete_id.in_(athlete_ids), LoadSample.date >= start,
                                              LoadSample.date <= end, ).order_by(LoadSample.date))
        return list(self.session.exec(statement).all())

    def upsert(self, athlete_id: int, date: datetime.date, internal_load: float) -> LoadSample:
        statement = select(LoadSample).where(LoadSample.athlete_id == athlete_id, LoadSample.date == date)
        sample = self.session.exec(statement).first()
        if sample is None:
            sample = LoadSample(athlete_id=athlete_id, date=date, internal_load=internal_load)
        else:
            sample.internal_load = internal_load
            sample.updated_at = datetime.datetime.utcnow()
        self.session.add(sample)
        self.session.commit()
        self.session.refresh(sample)
        return sample

    def sum_post_loads_for_day(self, athlete_id: int, date: datetime.date) -> float:
        """Sum of post-session internal loads for sessions starting on *date*."""
        day_start = datetime.datetime.combine(date, datetime.time.min)
        day_end = day_start + datetime.timedelta(days=1)
        statement = (select(func.coalesce(func.sum(WellnessSubmission.internal_load), 0.0))
                     .select_from(WellnessSubmission)
                     .join(TrainingSession, TrainingSession.id == WellnessSubmission.session_id)
                     .where(WellnessSubmission.athlete_id == athlete_id, WellnessSubmission.kind == "post",
                            TrainingSession.scheduled_start >= day_start,
                            TrainingSession.scheduled_start < day_end, ))
        return float(self.session.exec(statement).first() or 0.0)
