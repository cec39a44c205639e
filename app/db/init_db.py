"""
Database initialization.

Creates all tables directly from the SQLModel metadata.  Production
deployments use the alembic migrations instead.
"""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.db.session import engine as default_engine


def init_db(engine: Engine = default_engine) -> None:
    """Initialize database schema."""

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info(f"Tables ready: {', '.join(sorted(SQLModel.metadata.tables))}")


if __name__ == "__main__":
    init_db()
