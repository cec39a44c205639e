"""Attendance repository."""

from typing import Sequence

from sqlmodel import Session, select

from app.models.attendance import AttendanceRecord


class AttendanceRepository:
    """Repository for AttendanceRecord database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def get_by_session(self, session_id: int, athlete_ids: Sequence[int]) -> list[AttendanceRecord]:
        if not athlete_ids:
            return []
        statement = select(AttendanceRecord).where(AttendanceRecord.session_id == session_id,
                                                   AttendanceRecord.athlete_id.in_(athlete_ids), )
        return list(self.session.exec(statement).all())
