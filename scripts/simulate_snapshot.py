"""What would the staff snapshot look like for a typical Thursday session?

Builds a snapshot from an in-memory squad (no database) and prints the
rows and alerts.  Handy for eyeballing threshold changes.

Usage:
    python scripts/simulate_snapshot.py
"""

import asyncio
import datetime
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.clock import FixedClock
from app.monitoring.snapshot import build_snapshot
from app.schemas.eligibility import AthleteProfile
from app.schemas.load import LoadSampleData
from app.schemas.snapshot import PresenceStatus, SessionInfo, WellnessPresence

SESSION = SessionInfo(id=1, team_id=7, scheduled_start=datetime.datetime(2026, 10, 15, 18, 0),
                      planned_duration_minutes=90)

ROSTER = [
    AthleteProfile(id=1, name="Ana Souza", birth_date=datetime.date(2008, 4, 2)),
    AthleteProfile(id=2, name="Beatriz Lima", birth_date=datetime.date(2007, 11, 20), injured=True,
                   last_injury_date=datetime.date(2026, 10, 1)),
    AthleteProfile(id=3, name="Carla Dias", birth_date=datetime.date(2009, 1, 15), load_restricted=True),
    AthleteProfile(id=4, name="Daniela Rocha", birth_date=datetime.date(2008, 7, 30),
                   suspended_until=datetime.date(2026, 10, 20)),
]

ATTENDANCE = {1: PresenceStatus.PRESENT, 2: PresenceStatus.PRESENT, 3: PresenceStatus.PRESENT}

WELLNESS = {
    1: WellnessPresence(has_pre=True, has_post=True),
    2: WellnessPresence(has_pre=True, has_post=False),
    3: WellnessPresence(has_pre=True, has_post=True),
    4: WellnessPresence(),
}

# (athlete, daily load for the last 7 days, daily load for the 21 days before)
LOAD_PROFILE = [(1, 500, 480), (2, 900, 420), (3, 250, 520), (4, 450, 450)]


def _samples() -> list[LoadSampleData]:
    day = SESSION.scheduled_start.date()
    samples = []
    for athlete_id, acute, chronic in LOAD_PROFILE:
        for offset in range(28):
            load = acute if offset < 7 else chronic
            samples.append(LoadSampleData(athlete_id=athlete_id, date=day - datetime.timedelta(days=offset),
                                          internal_load=load))
    return samples


class InMemorySources:
    async def get_session(self, session_id):
        return SESSION

    async def get_roster(self, session):
        return ROSTER

    async def get_attendance(self, session, athlete_ids):
        return ATTENDANCE

    async def get_wellness(self, session, athlete_ids):
        return WELLNESS

    async def get_load_samples(self, athlete_ids, start, end):
        return [s for s in _samples() if start <= s.date <= end]

    async def get_response_rate(self, team_id, as_of):
        return 0.62


if __name__ == "__main__":
    clock = FixedClock(datetime.datetime(2026, 10, 15, 20, 0))
    snapshot = asyncio.run(build_snapshot(SESSION.id, InMemorySources(), clock=clock))

    print("=" * 72)
    print(f"Session {snapshot.context.session_id} on {snapshot.context.date} ({snapshot.context.status.value})")
    print("=" * 72)
    ps = snapshot.process_status
    print(f"Present {ps.present}/{ps.total_athletes}  wellness pending {ps.wellness_pending}  "
          f"engagement {ps.engagement_rate:.0%} ({ps.engagement_status})  risk={ps.session_risk}")
    ls = snapshot.load_summary
    print(f"Session load avg {ls.session_load_avg}  baseline {ls.team_baseline_avg}  "
          f"deviation {ls.deviation_pct}%  out of zone {ls.out_of_zone_athletes}")
    print()
    for row in snapshot.athletes:
        print(f"  {row.overall_status.value:<10} {row.name:<16} acwr={row.acwr!s:<6} zone={row.zone.value if row.zone else '-':<10}"
              f" {row.natural_category:<8} {'; '.join(row.reasons + row.warnings)}")
    print()
    for alert in snapshot.alerts:
        print(f"  [{alert.level.value:>8}] {alert.rule}: {alert.message}")
