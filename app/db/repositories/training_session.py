"""
Training session repository.

Handles database operations for :class:`TrainingSession`.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.training_session import TrainingSession


class TrainingSessionRepository:
    """Repository for TrainingSession database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: TrainingSession) -> TrainingSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_id(self, entry_id: int) -> Optional[TrainingSession]:
        return self.session.get(TrainingSession, entry_id)

    def get_by_team_between(self, team_id: int, start: datetime.datetime,
                            end: datetime.datetime, ) -> list[TrainingSession]:
        """Sessions of a team whose scheduled start falls in ``[start, end]``."""
        statement = (select(TrainingSession).where(TrainingSession.team_id == team_id,
                                                   TrainingSession.scheduled_start >= start,
                                                   TrainingSession.scheduled_start <= end, ).order_by(
            TrainingSession.scheduled_start))
        return list(self.session.exec(statement).all())
