"""Tests for snapshot alert generation, deduplication and ordering."""

import pytest

from app.monitoring.alerts import dedupe_and_order, generate_alerts
from app.monitoring.load import deviation_pct
from app.schemas.snapshot import (
    Alert,
    AlertLevel,
    AlertType,
    AthleteStatusRow,
    LoadStatus,
    LoadSummary,
    OverallStatus,
    PresenceStatus,
)


def _row(athlete_id: int, **overrides) -> AthleteStatusRow:
    defaults = {"athlete_id": athlete_id, "name": f"Athlete {athlete_id}", "can_play_today": True,
                "overall_status": OverallStatus.OK}
    defaults.update(overrides)
    return AthleteStatusRow(**defaults)


def _rules(alerts):
    return [a.rule for a in alerts]


class TestLoadAlerts:
    def test_deviation_above_threshold(self):
        """Baseline 500, session average 600 → +20% → warning."""
        dev = deviation_pct(600.0, 500.0)
        assert dev == 20.0
        summary = LoadSummary(session_load_avg=600.0, team_baseline_avg=500.0, deviation_pct=dev,
                              out_of_zone_athletes=0)
        alerts = generate_alerts([], summary)
        assert _rules(alerts) == ["load.deviation"]
        assert alerts[0].level is AlertLevel.WARNING
        assert "20.0% above" in alerts[0].message

    @pytest.mark.parametrize("dev", [15.0, -15.0, 0.0, None])
    def test_deviation_at_or_below_threshold(self, dev):
        alerts = generate_alerts([], LoadSummary(deviation_pct=dev))
        assert "load.deviation" not in _rules(alerts)

    def test_negative_deviation(self):
        alerts = generate_alerts([], LoadSummary(deviation_pct=-30.0))
        assert "below" in alerts[0].message

    def test_out_of_zone(self):
        alerts = generate_alerts([], LoadSummary(out_of_zone_athletes=3))
        assert _rules(alerts) == ["load.out_of_zone"]


class TestAthleteAlerts:
    def test_critical_load(self):
        rows = [_row(1, load_status=LoadStatus.CRITICAL, acwr=1.8, overall_status=OverallStatus.CRITICAL)]
        alerts = generate_alerts(rows, LoadSummary())
        assert alerts[0].level is AlertLevel.CRITICAL
        assert alerts[0].athlete_id == 1
        assert alerts[0].message == "Athlete 1: ACWR 1.8 on an injured or recently injured athlete"

    def test_present_while_blocked(self):
        rows = [_row(1, presence=PresenceStatus.PRESENT, reasons=["Athlete is injured"], can_play_today=False)]
        alerts = generate_alerts(rows, LoadSummary())
        assert _rules(alerts) == ["medical.present_while_blocked"]

    def test_absent_while_blocked_is_quiet(self):
        rows = [_row(1, presence=PresenceStatus.ABSENT, reasons=["Athlete is injured"], can_play_today=False)]
        assert generate_alerts(rows, LoadSummary()) == []


class TestSourceAndRateAlerts:
    def test_missing_sources(self):
        alerts = generate_alerts([], LoadSummary(), missing_sources=["attendance", "load"])
        assert _rules(alerts) == ["data.incomplete.attendance", "data.incomplete.load"]
        assert all(a.type is AlertType.DATA for a in alerts)

    def test_low_response_rate(self):
        alerts = generate_alerts([], LoadSummary(), response_rate=0.5)
        assert _rules(alerts) == ["wellness.response_rate"]
        assert alerts[0].level is AlertLevel.INFO

    @pytest.mark.parametrize("rate", [0.7, 0.95, None])
    def test_acceptable_or_unknown_response_rate(self, rate):
        assert generate_alerts([], LoadSummary(), response_rate=rate) == []


class TestOrdering:
    def test_levels_ordered_and_stable(self):
        rows = [
            _row(1, presence=PresenceStatus.PRESENT, reasons=["blocked"], can_play_today=False),
            _row(2, load_status=LoadStatus.CRITICAL, acwr=2.0),
        ]
        alerts = generate_alerts(rows, LoadSummary(out_of_zone_athletes=1), response_rate=0.1,
                                 missing_sources=["wellness"])
        assert [a.level for a in alerts] == [
            AlertLevel.CRITICAL, AlertLevel.WARNING, AlertLevel.WARNING, AlertLevel.WARNING, AlertLevel.INFO,
        ]
        assert _rules(alerts)[1:4] == ["medical.present_while_blocked", "load.out_of_zone",
                                       "data.incomplete.wellness"]
        assert {a.type for a in alerts} == set(AlertType)

    def test_duplicates_removed(self):
        alert = Alert(level=AlertLevel.WARNING, type=AlertType.LOAD, rule="load.out_of_zone", message="x")
        other = Alert(level=AlertLevel.WARNING, type=AlertType.LOAD, rule="load.out_of_zone", message="y",
                      athlete_id=4)
        assert dedupe_and_order([alert, alert.model_copy(), other]) == [alert, other]
