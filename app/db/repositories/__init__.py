"""Database repositories."""

from app.db.repositories.athlete import AthleteRepository
from app.db.repositories.training_session import TrainingSessionRepository
from app.db.repositories.attendance import AttendanceRepository
from app.db.repositories.wellness import WellnessRepository, WellnessUnlockRepository
from app.db.repositories.load_sample import LoadSampleRepository

__all__ = [
    "AthleteRepository",
    "TrainingSessionRepository",
    "AttendanceRepository",
    "WellnessRepository",
    "WellnessUnlockRepository",
    "LoadSampleRepository",
]
