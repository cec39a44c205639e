"""
Wellness repositories.

Submissions are unique per (athlete, session, kind).  Unlock records are
moved between states with conditional updates so that concurrent
requests for the same key cannot both win.
"""

from typing import Iterable, Optional, Sequence

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models.wellness import WellnessSubmission, WellnessUnlock


class WellnessRepository:
    """Repository for WellnessSubmission database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: WellnessSubmission) -> tuple[WellnessSubmission, bool]:
        """Insert *entry*.

        Returns:
            ``(entry, True)`` when inserted, ``(existing, False)`` when the
            unique key was already taken (possibly by a concurrent writer).
        """
        self.session.add(entry)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            existing = self.get(entry.athlete_id, entry.session_id, entry.kind)
            return existing, False
        self.session.refresh(entry)
        return entry, True

    def get(self, athlete_id: int, session_id: int, kind: str) -> Optional[WellnessSubmission]:
        statement = select(WellnessSubmission).where(WellnessSubmission.athlete_id == athlete_id,
                                                     WellnessSubmission.session_id == session_id,
                                                     WellnessSubmission.kind == kind, )
        return self.session.exec(statement).first()

    def get_by_session(self, session_id: int, athlete_ids: Sequence[int]) -> list[WellnessSubmission]:
        if not athlete_ids:
            return []
        statement = select(WellnessSubmission).where(WellnessSubmission.session_id == session_id,
                                                     WellnessSubmission.athlete_id.in_(athlete_ids), )
        return list(self.session.exec(statement).all())

    def get_by_sessions(self, session_ids: Sequence[int]) -> list[WellnessSubmission]:
        if not session_ids:
            return []
        statement = select(WellnessSubmission).where(WellnessSubmission.session_id.in_(session_ids))
        return list(self.session.exec(statement).all())

    def get_by_athlete(self, athlete_id: int, session_ids: Sequence[int]) -> list[WellnessSubmission]:
        if not session_ids:
            return []
        statement = select(WellnessSubmission).where(WellnessSubmission.athlete_id == athlete_id,
                                                     WellnessSubmission.session_id.in_(session_ids), )
        return list(self.session.exec(statement).all())

    def update(self, entry: WellnessSubmission) -> WellnessSubmission:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry


class WellnessUnlockRepository:
    """Repository for WellnessUnlock database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, athlete_id: int, session_id: int, kind: str) -> Optional[WellnessUnlock]:
        statement = select(WellnessUnlock).where(WellnessUnlock.athlete_id == athlete_id,
                                                 WellnessUnlock.session_id == session_id,
                                                 WellnessUnlock.kind == kind, )
        entry = self.session.exec(statement).first()
        if entry is not None:
            # Another connection may have moved the state since we last loaded it.
            self.session.refresh(entry)
        return entry

    def create(self, entry: WellnessUnlock) -> tuple[WellnessUnlock, bool]:
        """Insert the first unlock record for a key.

        Returns:
            ``(entry, True)`` when inserted, ``(winner, False)`` if another
            request inserted first.
        """
        self.session.add(entry)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return self.get(entry.athlete_id, entry.session_id, entry.kind), False
        self.session.refresh(entry)
        return entry, True

    def transition(self, unlock_id: int, from_states: Iterable[str], to_state: str, **fields) -> bool:
        """Move the record to *to_state* only if it is currently in *from_states*.

        Returns:
            ``True`` if this call performed the transition.
        """
        statement = (update(WellnessUnlock)
                     .where(WellnessUnlock.id == unlock_id, WellnessUnlock.state.in_(list(from_states)))
                     .values(state=to_state, **fields))
        result = self.session.execute(statement)
        self.session.commit()
        return result.rowcount == 1
