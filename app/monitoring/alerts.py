"""
Snapshot alert rules.

Alerts are generated from already-derived rows and summaries, never from
raw data.  They are deduplicated on ``(level, athlete_id, rule)`` and
returned ``critical → warning → info``, keeping generation order inside a
level.
"""

from __future__ import annotations

from typing import Iterable, Optional

from app.monitoring.config import DEFAULT_CONFIG, SnapshotConfig
from app.schemas.snapshot import (Alert, AlertLevel, AlertType, AthleteStatusRow, LoadStatus, LoadSummary,
                                  PresenceStatus, )


def _load_alerts(summary: LoadSummary, cfg: SnapshotConfig) -> list[Alert]:
    alerts: list[Alert] = []
    if summary.out_of_zone_athletes:
        alerts.append(Alert(
            level=AlertLevel.WARNING, type=AlertType.LOAD, rule="load.out_of_zone",
            message=f"{summary.out_of_zone_athletes} athlete(s) outside the optimal ACWR zone",
        ))
    if summary.deviation_pct is not None and abs(summary.deviation_pct) > cfg.deviation_alert_pct:
        direction = "above" if summary.deviation_pct > 0 else "below"
        alerts.append(Alert(
            level=AlertLevel.WARNING, type=AlertType.LOAD, rule="load.deviation",
            message=f"Session load {abs(summary.deviation_pct):.1f}% {direction} team baseline",
        ))
    return alerts


def _athlete_alerts(rows: Iterable[AthleteStatusRow]) -> list[Alert]:
    alerts: list[Alert] = []
    for row in rows:
        if row.load_status is LoadStatus.CRITICAL:
            alerts.append(Alert(
                level=AlertLevel.CRITICAL, type=AlertType.LOAD, rule="load.critical", athlete_id=row.athlete_id,
                message=f"{row.name}: ACWR {row.acwr} on an injured or recently injured athlete",
            ))
        if row.presence is PresenceStatus.PRESENT and row.reasons:
            alerts.append(Alert(
                level=AlertLevel.WARNING, type=AlertType.MEDICAL, rule="medical.present_while_blocked",
                athlete_id=row.athlete_id,
                message=f"{row.name} is marked present but blocked: {'; '.join(row.reasons)}",
            ))
    return alerts


def dedupe_and_order(alerts: Iterable[Alert]) -> list[Alert]:
    seen: set[tuple[AlertLevel, Optional[int], str]] = set()
    unique: list[Alert] = []
    for alert in alerts:
        key = (alert.level, alert.athlete_id, alert.rule)
        if key in seen:
            continue
        seen.add(key)
        unique.append(alert)
    # sorted() is stable, so generation order survives inside a level.
    return sorted(unique, key=lambda a: a.level.priority)


def generate_alerts(rows: Iterable[AthleteStatusRow], summary: LoadSummary, *,
                    response_rate: Optional[float] = None, missing_sources: Iterable[str] = (),
                    config: Optional[SnapshotConfig] = None, ) -> list[Alert]:
    """Build the snapshot alert list.

    Args:
        rows: Athlete rows with their derived statuses.
        summary: Session load summary.
        response_rate: Team monthly wellness response rate (0-1), ``None``
            if unavailable.
        missing_sources: Names of snapshot sources that failed.
        config: Optional :class:`SnapshotConfig` override.
    """
    cfg = config or DEFAULT_CONFIG.snapshot
    alerts: list[Alert] = []

    alerts.extend(_athlete_alerts(rows))
    alerts.extend(_load_alerts(summary, cfg))

    for source in missing_sources:
        alerts.append(Alert(
            level=AlertLevel.WARNING, type=AlertType.DATA, rule=f"data.incomplete.{source}",
            message=f"{source.capitalize()} data unavailable: snapshot is incomplete",
        ))

    if response_rate is not None and response_rate < cfg.response_rate_threshold:
        alerts.append(Alert(
            level=AlertLevel.INFO, type=AlertType.WELLNESS, rule="wellness.response_rate",
            message=(f"Monthly wellness response rate {response_rate:.0%} is below "
                     f"{cfg.response_rate_threshold:.0%}"),
        ))

    return dedupe_and_order(alerts)
