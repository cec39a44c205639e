"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.athlete import Athlete  # noqa: F401
from app.models.training_session import TrainingSession  # noqa: F401
from app.models.attendance import AttendanceRecord  # noqa: F401
from app.models.wellness import WellnessSubmission, WellnessUnlock  # noqa: F401
from app.models.load_sample import LoadSample  # noqa: F401
