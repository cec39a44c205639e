"""SQLModel database models."""

from app.models.athlete import Athlete
from app.models.training_session import TrainingSession
from app.models.attendance import AttendanceRecord
from app.models.wellness import WellnessSubmission, WellnessUnlock
from app.models.load_sample import LoadSample

__all__ = [
    "Athlete",
    "TrainingSession",
    "AttendanceRecord",
    "WellnessSubmission",
    "WellnessUnlock",
    "LoadSample",
]
