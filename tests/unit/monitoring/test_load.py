"""Tests for internal load, ACWR and zone classification."""

import datetime

import pytest

from app.core.errors import ValidationError
from app.monitoring.config import DEFAULT_CONFIG, LoadConfig
from app.monitoring.load import (
    classify_zone,
    compute_load,
    deviation_pct,
    internal_load,
    out_of_zone_count,
    team_baseline,
)
from app.schemas.load import LoadResult, LoadSampleData, Zone

AS_OF = datetime.date(2026, 10, 15)


# ======================================================================
# Helpers
# ======================================================================


def _daily(athlete_id: int, loads: list[float]) -> list[LoadSampleData]:
    """One sample per day, ``loads[0]`` on AS_OF and going backwards."""
    return [
        LoadSampleData(athlete_id=athlete_id, date=AS_OF - datetime.timedelta(days=i), internal_load=load)
        for i, load in enumerate(loads)
    ]


def _result(chronic, acwr=None, zone=None) -> LoadResult:
    return LoadResult(athlete_id=1, as_of_date=AS_OF, acute=0.0, chronic=chronic, acwr=acwr, zone=zone,
                      days_of_data=1)


# ======================================================================
# internal_load
# ======================================================================


class TestInternalLoad:
    def test_rpe_times_minutes(self):
        assert internal_load(8, 90) == 720.0

    def test_zero_minutes(self):
        assert internal_load(5, 0) == 0.0

    @pytest.mark.parametrize("rpe, minutes", [(-1, 60), (10.5, 60), (None, 60), (5, -10), (5, None)])
    def test_invalid_inputs(self, rpe, minutes):
        with pytest.raises(ValidationError):
            internal_load(rpe, minutes)


# ======================================================================
# classify_zone
# ======================================================================


class TestClassifyZone:
    @pytest.mark.parametrize(
        "acwr, expected",
        [
            (0.0, Zone.UNDERLOAD),
            (0.79, Zone.UNDERLOAD),
            (0.8, Zone.OPTIMAL),
            (1.2, Zone.OPTIMAL),
            (1.5, Zone.OPTIMAL),
            (1.51, Zone.OVERLOAD),
            (3.0, Zone.OVERLOAD),
        ],
    )
    def test_zone_boundaries(self, acwr, expected):
        assert classify_zone(acwr) is expected

    def test_undefined_stays_undefined(self):
        assert classify_zone(None) is None

    def test_custom_bounds(self):
        cfg = LoadConfig(zone_lower=0.9, zone_upper=1.3)
        assert classify_zone(0.85, cfg) is Zone.UNDERLOAD
        assert classify_zone(1.4, cfg) is Zone.OVERLOAD


# ======================================================================
# compute_load
# ======================================================================


class TestComputeLoad:
    def test_steady_block_is_optimal(self):
        """7 days at 600, 14 days at 700, 7 rest days → chronic 500, ACWR 1.2."""
        samples = _daily(1, [600] * 7 + [700] * 14 + [0] * 7)
        r = compute_load(1, AS_OF, samples)
        assert r.acute == 600.0
        assert r.chronic == 500.0
        assert r.acwr == 1.2
        assert r.zone is Zone.OPTIMAL
        assert r.days_of_data == 28

    def test_rest_days_count_in_denominator(self):
        # Two sessions in the last week only
        samples = _daily(1, [700, 0, 0, 700])
        r = compute_load(1, AS_OF, samples)
        assert r.acute == 200.0
        assert r.chronic == 50.0
        assert r.acwr == 4.0
        assert r.zone is Zone.OVERLOAD

    def test_no_samples_is_undefined(self):
        r = compute_load(1, AS_OF, [])
        assert r.acute == 0.0
        assert r.chronic is None
        assert r.acwr is None
        assert r.zone is None
        assert r.days_of_data == 0

    def test_zero_chronic_is_undefined_not_zero(self):
        r = compute_load(1, AS_OF, _daily(1, [0, 0, 0]))
        assert r.chronic == 0.0
        assert r.acwr is None
        assert r.zone is None

    def test_samples_outside_window_ignored(self):
        old = LoadSampleData(athlete_id=1, date=AS_OF - datetime.timedelta(days=28), internal_load=1000)
        future = LoadSampleData(athlete_id=1, date=AS_OF + datetime.timedelta(days=1), internal_load=1000)
        r = compute_load(1, AS_OF, [old, future])
        assert r.days_of_data == 0
        assert r.acwr is None

    def test_other_athletes_ignored(self):
        r = compute_load(1, AS_OF, _daily(2, [600] * 28))
        assert r.days_of_data == 0

    def test_same_day_samples_are_summed(self):
        samples = _daily(1, [300]) + _daily(1, [400])
        r = compute_load(1, AS_OF, samples)
        assert r.days_of_data == 1
        assert r.acute == 100.0
        assert r.chronic == 25.0

    def test_acwr_rounded_to_three_places(self):
        samples = _daily(1, [100] + [0] * 6 + [300] * 21)
        r = compute_load(1, AS_OF, samples)
        # acute 100/7, chronic 6400/28
        assert r.acwr == round((100 / 7) / (6400 / 28), 3)

    @pytest.mark.parametrize(
        "loads, reported, expected",
        [
            # acute 600, chronic 11198/28: ratio 1.50027
            ([600] * 7 + [500] * 13 + [498], 1.5, Zone.OVERLOAD),
            # acute 500, chronic 17505/28: ratio 0.79977
            ([500] * 7 + [700] * 20 + [5], 0.8, Zone.UNDERLOAD),
        ],
    )
    def test_zone_uses_unrounded_ratio(self, loads, reported, expected):
        r = compute_load(1, AS_OF, _daily(1, loads))
        assert r.acwr == reported
        assert r.zone is expected

    def test_default_config_windows(self):
        assert DEFAULT_CONFIG.load.acute_days == 7
        assert DEFAULT_CONFIG.load.chronic_days == 28


class TestLoadConfig:
    def test_acute_longer_than_chronic_rejected(self):
        with pytest.raises(ValueError):
            LoadConfig(acute_days=30, chronic_days=28)

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            LoadConfig(zone_lower=1.5, zone_upper=0.8)


# ======================================================================
# Team helpers
# ======================================================================


class TestTeamHelpers:
    def test_baseline_skips_undefined(self):
        assert team_baseline([_result(400.0), _result(600.0), _result(None)]) == 500.0

    def test_baseline_empty(self):
        assert team_baseline([_result(None)]) is None

    def test_deviation_pct(self):
        assert deviation_pct(600.0, 500.0) == 20.0
        assert deviation_pct(400.0, 500.0) == -20.0

    @pytest.mark.parametrize("avg, baseline", [(None, 500.0), (600.0, None), (600.0, 0.0)])
    def test_deviation_undefined(self, avg, baseline):
        assert deviation_pct(avg, baseline) is None

    def test_out_of_zone_count(self):
        results = [
            _result(500.0, 1.0, Zone.OPTIMAL),
            _result(500.0, 0.5, Zone.UNDERLOAD),
            _result(500.0, 1.8, Zone.OVERLOAD),
            _result(None),
        ]
        assert out_of_zone_count(results) == 2
