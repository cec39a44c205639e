"""
Athlete repository.

Read access to the roster.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.athlete import Athlete


class AthleteRepository:
    """Repository for Athlete database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, athlete: Athlete) -> Athlete:
        self.session.add(athlete)
        self.session.commit()
        self.session.refresh(athlete)
        return athlete

    def get_by_id(self, athlete_id: int) -> Optional[Athlete]:
        return self.session.get(Athlete, athlete_id)

    def get_roster(self, team_id: int) -> list[Athlete]:
        """Athletes registered to the team, archived ones excluded."""
        statement = (select(Athlete).where(Athlete.team_id == team_id, Athlete.state != "archived")
                     .order_by(Athlete.full_name, Athlete.id))
        return list(self.session.exec(statement).all())
