"""Shared fixtures: a throwaway file-backed SQLite database and a frozen clock."""

import datetime

import pytest
from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401  (registers every table on SQLModel.metadata)
from app.core.clock import FixedClock
from app.db.repositories import AthleteRepository, AttendanceRepository, TrainingSessionRepository
from app.models import Athlete, AttendanceRecord, TrainingSession

SESSION_START = datetime.datetime(2026, 10, 15, 18, 0)


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    """Frozen two hours before the standard session start."""
    return FixedClock(SESSION_START - datetime.timedelta(hours=2))


@pytest.fixture
def squad(db):
    """Team 1: three active athletes, one archived, and one 90-minute session at SESSION_START.

    A fifth athlete belongs to team 2.  Ana and Bia are marked present.
    """
    athletes_repo = AthleteRepository(db)
    athletes = [athletes_repo.create(a) for a in (
        Athlete(team_id=1, full_name="Ana Souza", birth_date=datetime.date(2008, 5, 1)),
        Athlete(team_id=1, full_name="Bia Lima", birth_date=datetime.date(2008, 6, 1), injured=True),
        Athlete(team_id=1, full_name="Caio Dias", birth_date=datetime.date(2008, 7, 1)),
        Athlete(team_id=1, full_name="Old Player", birth_date=datetime.date(2000, 1, 1), state="archived"),
        Athlete(team_id=2, full_name="Other Team", birth_date=datetime.date(2008, 1, 1)),
    )]
    training = TrainingSessionRepository(db).create(
        TrainingSession(team_id=1, scheduled_start=SESSION_START, planned_duration_minutes=90)
    )

    attendance = AttendanceRepository(db)
    for athlete in athletes[:2]:
        attendance.create(AttendanceRecord(athlete_id=athlete.id, session_id=training.id, presence_status="present"))
    return {"athletes": athletes, "session": training}
