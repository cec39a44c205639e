"""Tests for age, category and play eligibility."""

import datetime

import pytest

from app.core.errors import ConfigurationError, ValidationError
from app.monitoring.eligibility import (
    DEFAULT_CATEGORY_TABLE,
    age_on,
    can_play_in_category,
    compute_eligibility,
    has_recent_injury,
    natural_category,
    validate_category_table,
)
from app.schemas.eligibility import AthleteProfile, AthleteState, CategoryBracket

REF = datetime.date(2024, 3, 1)

U12_U14 = (
    CategoryBracket(name="U12", min_age=11, max_age=12),
    CategoryBracket(name="U14", min_age=12, max_age=14),
    CategoryBracket(name="U16", min_age=14, max_age=16),
)


def _athlete(**overrides) -> AthleteProfile:
    defaults = {"id": 1, "name": "Test Athlete", "birth_date": datetime.date(2012, 3, 1)}
    defaults.update(overrides)
    return AthleteProfile(**defaults)


# ======================================================================
# Age and natural category
# ======================================================================


class TestAge:
    def test_twelfth_birthday_is_age_12(self):
        assert age_on(datetime.date(2012, 3, 1), REF) == 12

    def test_day_before_birthday(self):
        assert age_on(datetime.date(2012, 3, 1), datetime.date(2024, 2, 28)) == 11

    def test_natural_category_lower_bound_inclusive(self):
        assert natural_category(12, U12_U14).name == "U14"
        assert natural_category(11, U12_U14).name == "U12"

    def test_natural_category_uncovered(self):
        assert natural_category(40, U12_U14) is None

    @pytest.mark.parametrize(
        "age, expected",
        [(12, "Mirim"), (13, "Infantil"), (16, "Cadete"), (18, "Juvenil"), (21, "Júnior"), (30, "Adulto"),
         (45, "Master")],
    )
    def test_default_table(self, age, expected):
        assert natural_category(age).name == expected


# ======================================================================
# compute_eligibility
# ======================================================================


class TestComputeEligibility:
    def test_bracket_boundary(self):
        """Born 2012-03-01, reference 2024-03-01 → age 12 → [12, 14)."""
        r = compute_eligibility(_athlete(), REF, U12_U14)
        assert r.age == 12
        assert r.natural_category == "U14"
        assert r.eligible_categories == ["U14", "U16"]
        assert r.can_play_today is True
        assert r.reasons == []
        assert r.badge == "green"

    def test_may_not_play_younger(self):
        assert can_play_in_category(_athlete(), "U12", REF, U12_U14) is False
        assert can_play_in_category(_athlete(), "U14", REF, U12_U14) is True
        assert can_play_in_category(_athlete(), "U16", REF, U12_U14) is True

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            can_play_in_category(_athlete(), "U99", REF, U12_U14)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"injured": True},
            {"medical_restriction": True},
            {"state": AthleteState.RELEASED},
            {"state": AthleteState.ARCHIVED},
            {"suspended_until": datetime.date(2024, 3, 2)},
        ],
    )
    def test_hard_blocks(self, overrides):
        r = compute_eligibility(_athlete(**overrides), REF, U12_U14)
        assert r.can_play_today is False
        assert len(r.reasons) == 1
        assert r.badge == "red"

    def test_suspension_ending_today_does_not_block(self):
        r = compute_eligibility(_athlete(suspended_until=REF), REF, U12_U14)
        assert r.can_play_today is True

    def test_blocks_accumulate(self):
        r = compute_eligibility(_athlete(injured=True, medical_restriction=True), REF, U12_U14)
        assert len(r.reasons) == 2

    def test_load_restricted_is_only_a_warning(self):
        r = compute_eligibility(_athlete(load_restricted=True), REF, U12_U14)
        assert r.can_play_today is True
        assert r.reasons == []
        assert len(r.warnings) == 1
        assert r.badge == "yellow"

    def test_can_play_iff_no_reasons(self):
        for overrides in ({}, {"injured": True}, {"load_restricted": True}):
            r = compute_eligibility(_athlete(**overrides), REF, U12_U14)
            assert r.can_play_today is (not r.reasons)

    def test_missing_birth_date(self):
        with pytest.raises(ValidationError):
            compute_eligibility(_athlete(birth_date=None), REF, U12_U14)

    def test_birth_date_after_reference(self):
        with pytest.raises(ValidationError):
            compute_eligibility(_athlete(birth_date=datetime.date(2025, 1, 1)), REF, U12_U14)

    def test_uncovered_age_warns(self):
        r = compute_eligibility(_athlete(birth_date=datetime.date(1980, 1, 1)), REF, U12_U14)
        assert r.natural_category is None
        assert r.eligible_categories == []
        assert r.warnings == ["No category covers age 44"]


class TestRecentInjury:
    def test_within_horizon(self):
        a = _athlete(last_injury_date=REF - datetime.timedelta(days=30))
        assert has_recent_injury(a, REF, 30) is True

    def test_outside_horizon(self):
        a = _athlete(last_injury_date=REF - datetime.timedelta(days=31))
        assert has_recent_injury(a, REF, 30) is False

    def test_no_injury(self):
        assert has_recent_injury(_athlete(), REF, 30) is False


# ======================================================================
# Category table validation
# ======================================================================


class TestValidateCategoryTable:
    def test_default_table_is_valid(self):
        validate_category_table(DEFAULT_CATEGORY_TABLE)

    def test_open_ended_last_is_valid(self):
        validate_category_table(U12_U14 + (CategoryBracket(name="Senior", min_age=16),))

    @pytest.mark.parametrize(
        "table",
        [
            (),
            (CategoryBracket(name="A", min_age=0, max_age=10), CategoryBracket(name="A", min_age=10, max_age=12)),
            (CategoryBracket(name="A", min_age=0, max_age=10), CategoryBracket(name="B", min_age=11, max_age=12)),
            (CategoryBracket(name="A", min_age=0, max_age=10), CategoryBracket(name="B", min_age=9, max_age=12)),
            (CategoryBracket(name="A", min_age=5, max_age=5),),
            (CategoryBracket(name="A", min_age=0), CategoryBracket(name="B", min_age=10, max_age=12)),
        ],
        ids=["empty", "duplicate", "gap", "overlap", "empty-bracket", "open-not-last"],
    )
    def test_invalid_tables(self, table):
        with pytest.raises(ConfigurationError):
            validate_category_table(table)
