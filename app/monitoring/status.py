"""
Per-athlete status derivation.

``load_status`` and ``overall_status`` are produced once per athlete by
the functions below; the roster row, the sort order and the alert rules
all read the resulting :class:`StatusVerdict` instead of re-deriving it.

Overall status comes from an ordered rule table.  The first matching
level wins (``critical`` before ``attention``); every matching rule of
that level is reported so the row can explain itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from app.schemas.load import LoadResult, Zone
from app.schemas.snapshot import AthleteStatusRow, LoadStatus, OverallStatus, WellnessStatus


def classify_load_status(load: Optional[LoadResult], injury_flag: bool) -> Optional[LoadStatus]:
    """Load status for one athlete.

    Args:
        load: ACWR result, ``None`` if the load source is unavailable.
        injury_flag: ``injured`` or an injury within the recent-injury horizon.

    Returns:
        ``critical`` for an overload-zone ratio on an injured or recently
        injured athlete, ``alert`` for any other out-of-zone ratio, ``ok``
        in zone, ``no_data`` when ACWR is undefined, ``None`` when the
        source is missing.
    """
    if load is None:
        return None
    if load.acwr is None:
        return LoadStatus.NO_DATA
    if load.zone is Zone.OVERLOAD and injury_flag:
        return LoadStatus.CRITICAL
    if load.zone is Zone.OPTIMAL:
        return LoadStatus.OK
    return LoadStatus.ALERT


@dataclass(frozen=True)
class AthleteSignals:
    """Inputs of the overall-status rule table."""

    hard_blocks: int
    load_status: Optional[LoadStatus]
    wellness: Optional[WellnessStatus]


@dataclass(frozen=True)
class StatusVerdict:
    status: OverallStatus
    rules: tuple[str, ...] = field(default_factory=tuple)


_RULES: tuple[tuple[OverallStatus, str, Callable[[AthleteSignals], bool]], ...] = (
    (OverallStatus.CRITICAL, "eligibility_block", lambda s: s.hard_blocks > 0),
    (OverallStatus.CRITICAL, "load_critical", lambda s: s.load_status is LoadStatus.CRITICAL),
    (OverallStatus.ATTENTION, "wellness_pending", lambda s: s.wellness is WellnessStatus.PENDING),
    (OverallStatus.ATTENTION, "load_alert", lambda s: s.load_status is LoadStatus.ALERT),
)


def classify_overall(signals: AthleteSignals) -> StatusVerdict:
    """Run the rule table; ``ok`` if nothing matches."""
    for level in (OverallStatus.CRITICAL, OverallStatus.ATTENTION):
        matched = tuple(name for status, name, rule in _RULES if status is level and rule(signals))
        if matched:
            return StatusVerdict(level, matched)
    return StatusVerdict(OverallStatus.OK)


def roster_sort_key(row: AthleteStatusRow) -> tuple[int, str, int]:
    """``critical > attention > ok``, then name ascending (athlete id breaks exact ties)."""
    return row.overall_status.priority, row.name.casefold(), row.athlete_id


def sort_roster(rows: list[AthleteStatusRow]) -> list[AthleteStatusRow]:
    return sorted(rows, key=roster_sort_key)
