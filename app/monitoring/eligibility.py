"""
Eligibility classifier: natural category and play eligibility.

Age is ``floor((reference_date - birth_date) / 365.25 days)``.  The
natural category is the bracket of a fixed, ordered age table that
contains that age (lower bound inclusive, upper bound exclusive).  An
athlete may play in the natural category or any older one, never in a
younger one.

Hard blocks fill ``reasons`` and force ``can_play_today = False``:

- roster state other than ``active``
- ``injured``
- ``medical_restriction``
- ``suspended_until`` strictly after the reference date

Soft flags fill ``warnings`` and never block:

- ``load_restricted``
"""

from __future__ import annotations

import datetime
import math
from typing import Optional, Sequence

from app.core.errors import ConfigurationError, ValidationError
from app.schemas.eligibility import AthleteProfile, AthleteState, CategoryBracket, EligibilityResult

# ======================================================================
# Category table
# ======================================================================

DEFAULT_CATEGORY_TABLE: tuple[CategoryBracket, ...] = (
    CategoryBracket(name="Mirim", min_age=0, max_age=13),
    CategoryBracket(name="Infantil", min_age=13, max_age=15),
    CategoryBracket(name="Cadete", min_age=15, max_age=17),
    CategoryBracket(name="Juvenil", min_age=17, max_age=19),
    CategoryBracket(name="Júnior", min_age=19, max_age=22),
    CategoryBracket(name="Adulto", min_age=22, max_age=37),
    CategoryBracket(name="Master", min_age=37, max_age=61),
)

_DAYS_PER_YEAR = 365.25


def validate_category_table(table: Sequence[CategoryBracket]) -> None:
    """Check that brackets are ordered youngest first, contiguous and non-overlapping.

    Called once at startup.

    Raises:
        ConfigurationError: empty table, duplicate names, empty bracket,
            open-ended bracket before the last one, gap or overlap.
    """
    if not table:
        raise ConfigurationError("Category table is empty")

    names = [b.name for b in table]
    if len(set(names)) != len(names):
        raise ConfigurationError(f"Duplicate category names in table: {names}")

    for index, bracket in enumerate(table):
        if bracket.max_age is None:
            if index != len(table) - 1:
                raise ConfigurationError(f"Open-ended bracket '{bracket.name}' must be the last one")
        elif bracket.max_age <= bracket.min_age:
            raise ConfigurationError(
                f"Bracket '{bracket.name}' is empty: [{bracket.min_age}, {bracket.max_age})"
            )

        if index == 0:
            continue
        previous = table[index - 1]
        if bracket.min_age > previous.max_age:
            raise ConfigurationError(
                f"Gap between '{previous.name}' (< {previous.max_age}) and '{bracket.name}' (>= {bracket.min_age})"
            )
        if bracket.min_age < previous.max_age:
            raise ConfigurationError(
                f"Overlap between '{previous.name}' (< {previous.max_age}) and '{bracket.name}' (>= {bracket.min_age})"
            )


def age_on(birth_date: datetime.date, reference_date: datetime.date) -> int:
    """Whole years between the two dates, on a 365.25-day year."""
    days = (reference_date - birth_date).days
    return math.floor(days / _DAYS_PER_YEAR)


def natural_category(age: int, table: Sequence[CategoryBracket] = DEFAULT_CATEGORY_TABLE) -> Optional[CategoryBracket]:
    for bracket in table:
        if bracket.contains(age):
            return bracket
    return None


def eligible_categories(natural: Optional[CategoryBracket],
                        table: Sequence[CategoryBracket] = DEFAULT_CATEGORY_TABLE) -> list[str]:
    """The natural category and every older one.  Empty if no natural category."""
    if natural is None:
        return []
    names = [b.name for b in table]
    return names[names.index(natural.name):]


# ======================================================================
# Blocks and flags
# ======================================================================

_STATE_LABELS = {
    AthleteState.RELEASED: "released",
    AthleteState.ARCHIVED: "archived",
}


def _hard_blocks(athlete: AthleteProfile, reference_date: datetime.date) -> list[str]:
    reasons: list[str] = []
    if athlete.state is not AthleteState.ACTIVE:
        reasons.append(f"Athlete is {_STATE_LABELS.get(athlete.state, athlete.state.value)} and not on the active roster")
    if athlete.injured:
        reasons.append("Athlete is injured and cannot take part in matches or training")
    if athlete.medical_restriction:
        reasons.append("Athlete has an active medical restriction")
    if athlete.suspended_until is not None and athlete.suspended_until > reference_date:
        reasons.append(f"Athlete is suspended until {athlete.suspended_until.isoformat()}")
    return reasons


def _soft_flags(athlete: AthleteProfile) -> list[str]:
    warnings: list[str] = []
    if athlete.load_restricted:
        warnings.append("Athlete is load-restricted: limit minutes and volume")
    return warnings


def _badge(reasons: list[str], warnings: list[str]) -> str:
    if reasons:
        return "red"
    if warnings:
        return "yellow"
    return "green"


# ======================================================================
# Main entry points
# ======================================================================


def compute_eligibility(athlete: AthleteProfile, reference_date: datetime.date,
                        table: Sequence[CategoryBracket] = DEFAULT_CATEGORY_TABLE, ) -> EligibilityResult:
    """Classify category and play eligibility for one athlete.

    Raises:
        ValidationError: missing ``birth_date`` or a birth date after the
            reference date.
    """
    if athlete.birth_date is None:
        raise ValidationError(f"Athlete {athlete.id} has no birth_date", athlete_id=athlete.id)
    if athlete.birth_date > reference_date:
        raise ValidationError(
            f"Athlete {athlete.id} birth_date {athlete.birth_date} is after {reference_date}",
            athlete_id=athlete.id,
        )

    age = age_on(athlete.birth_date, reference_date)
    natural = natural_category(age, table)

    reasons = _hard_blocks(athlete, reference_date)
    warnings = _soft_flags(athlete)
    if natural is None:
        warnings.append(f"No category covers age {age}")

    return EligibilityResult(
        athlete_id=athlete.id,
        reference_date=reference_date,
        age=age,
        natural_category=natural.name if natural else None,
        eligible_categories=eligible_categories(natural, table),
        can_play_today=not reasons,
        reasons=reasons,
        warnings=warnings,
        badge=_badge(reasons, warnings),
    )


def can_play_in_category(athlete: AthleteProfile, category_name: str, reference_date: datetime.date,
                         table: Sequence[CategoryBracket] = DEFAULT_CATEGORY_TABLE, ) -> bool:
    """Whether the athlete may be fielded in *category_name* (natural or older)."""
    if category_name not in {b.name for b in table}:
        raise ValidationError(f"Unknown category '{category_name}'")
    result = compute_eligibility(athlete, reference_date, table)
    return category_name in result.eligible_categories


def has_recent_injury(athlete: AthleteProfile, reference_date: datetime.date, days: int) -> bool:
    """Injury recorded within the last *days* days (inclusive)."""
    if athlete.last_injury_date is None:
        return False
    elapsed = (reference_date - athlete.last_injury_date).days
    return 0 <= elapsed <= days
