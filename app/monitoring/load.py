"""
Internal load and ACWR (Acute:Chronic Workload Ratio).

Internal load for a session is ``session_rpe × minutes_effective``
(Foster session-RPE).  Samples are aggregated to one value per athlete
per calendar day.

Windows are trailing and inclusive of ``as_of_date``:

- acute   = mean daily load over the last 7 days
- chronic = mean daily load over the last 28 days

Days without a session contribute 0 but still count in the denominator.
Chronic load is undefined until the chronic window holds at least one
sample; ACWR is undefined while chronic is undefined or zero.  Undefined
values are ``None``, never 0.

Zones partition the ACWR domain:

    acwr <  0.8          underload
    0.8 <= acwr <= 1.5   optimal
    acwr >  1.5          overload

Team-level helpers (baseline, deviation, out-of-zone count) feed the
session snapshot.
"""

from __future__ import annotations

import datetime
from collections import defaultdict
from typing import Iterable, Optional

from app.core.errors import ValidationError
from app.monitoring.config import DEFAULT_CONFIG, LoadConfig
from app.schemas.load import LoadResult, LoadSampleData, Zone

# ======================================================================
# Session load
# ======================================================================


def internal_load(session_rpe: float, minutes_effective: float) -> float:
    """Session-RPE internal load.

    Raises:
        ValidationError: RPE outside 0-10 or negative minutes.
    """
    if session_rpe is None or not 0 <= session_rpe <= 10:
        raise ValidationError(f"session_rpe must be within 0-10, got {session_rpe!r}")
    if minutes_effective is None or minutes_effective < 0:
        raise ValidationError(f"minutes_effective must be >= 0, got {minutes_effective!r}")
    return float(session_rpe) * float(minutes_effective)


# ======================================================================
# Zone labelling
# ======================================================================


def classify_zone(acwr: Optional[float], config: Optional[LoadConfig] = None) -> Optional[Zone]:
    """Map an ACWR value to its zone.  ``None`` stays ``None``."""
    if acwr is None:
        return None
    cfg = config or DEFAULT_CONFIG.load
    if acwr < cfg.zone_lower:
        return Zone.UNDERLOAD
    if acwr > cfg.zone_upper:
        return Zone.OVERLOAD
    return Zone.OPTIMAL


# ======================================================================
# Per-athlete computation
# ======================================================================


def _daily_totals(athlete_id: int, samples: Iterable[LoadSampleData]) -> dict[datetime.date, float]:
    totals: dict[datetime.date, float] = defaultdict(float)
    for sample in samples:
        if sample.athlete_id == athlete_id:
            totals[sample.date] += sample.internal_load
    return totals


def _window_mean(totals: dict[datetime.date, float], as_of_date: datetime.date, days: int) -> float:
    start = as_of_date - datetime.timedelta(days=days - 1)
    window_sum = sum(load for day, load in totals.items() if start <= day <= as_of_date)
    return window_sum / days


def compute_load(athlete_id: int, as_of_date: datetime.date, samples: Iterable[LoadSampleData],
                 config: Optional[LoadConfig] = None, ) -> LoadResult:
    """Compute acute/chronic means, ACWR and zone for one athlete.

    Args:
        athlete_id: Athlete whose samples are considered; others are ignored.
        as_of_date: Last day (inclusive) of both windows.
        samples: Daily load samples; several samples on one day are summed,
            samples after ``as_of_date`` are ignored.
        config: Optional :class:`LoadConfig` override.

    Returns:
        :class:`LoadResult`.  The zone is judged on the unrounded ratio;
        only the reported ``acwr`` is rounded to 3 places.
    """
    cfg = config or DEFAULT_CONFIG.load
    totals = _daily_totals(athlete_id, samples)

    chronic_start = as_of_date - datetime.timedelta(days=cfg.chronic_days - 1)
    days_of_data = sum(1 for day in totals if chronic_start <= day <= as_of_date)

    acute = _window_mean(totals, as_of_date, cfg.acute_days)
    chronic: Optional[float] = None
    ratio: Optional[float] = None

    if days_of_data > 0:
        chronic = _window_mean(totals, as_of_date, cfg.chronic_days)
        if chronic > 0:
            ratio = acute / chronic

    return LoadResult(
        athlete_id=athlete_id,
        as_of_date=as_of_date,
        acute=round(acute, 2),
        chronic=round(chronic, 2) if chronic is not None else None,
        acwr=round(ratio, 3) if ratio is not None else None,
        zone=classify_zone(ratio, cfg),
        days_of_data=days_of_data,
    )


# ======================================================================
# Team-level helpers
# ======================================================================


def team_baseline(results: Iterable[LoadResult]) -> Optional[float]:
    """Mean chronic load of the roster.  Undefined chronic values are skipped."""
    chronic_values = [r.chronic for r in results if r.chronic is not None]
    if not chronic_values:
        return None
    return sum(chronic_values) / len(chronic_values)


def deviation_pct(session_load_avg: Optional[float], baseline: Optional[float]) -> Optional[float]:
    """``(session_avg - baseline) / baseline × 100``; ``None`` if baseline is 0 or unknown."""
    if session_load_avg is None or baseline is None or baseline == 0:
        return None
    return (session_load_avg - baseline) / baseline * 100.0


def out_of_zone_count(results: Iterable[LoadResult]) -> int:
    """Athletes with a defined ACWR whose zone is not optimal."""
    return sum(1 for r in results if r.acwr is not None and r.zone is not Zone.OPTIMAL)
