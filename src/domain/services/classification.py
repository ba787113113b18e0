"""Life-stage and purpose rules for cuyes.

Every rule here is a pure function of its arguments. Ages depend on the
calendar, so callers pass ``today`` explicitly instead of reading the clock;
the use cases resolve it from the farm timezone.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date

from src.domain.value_objects.life_stage import PINNED_STAGES, LifeStage, Purpose
from src.domain.value_objects.sex import Sex

JUVENILE_AGE_MONTHS = 3
ADULT_AGE_MONTHS = 6
BREEDING_MALE_AGE_MONTHS = 8

MIN_PURPOSE_CHANGE_MONTHS = 2
MIN_BREEDING_MALE_MONTHS = 4
MIN_BREEDING_FEMALE_MONTHS = 3

# Bulk registration works from an age in days and counts 30-day months
DAYS_PER_MONTH = 30


def age_in_months(birth_date: date, today: date) -> int:
    """Whole calendar months elapsed since ``birth_date``, never negative."""
    months = (today.year - birth_date.year) * 12 + (today.month - birth_date.month)
    if today.day < birth_date.day:
        months -= 1
    return max(0, months)


def shift_months(value: date, months: int) -> date:
    """Move ``value`` by ``months`` calendar months, clamping the day to the month end."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def derive_stage(birth_date: date, sex: str | None, today: date) -> str:
    months = age_in_months(birth_date, today)
    if months < JUVENILE_AGE_MONTHS:
        return LifeStage.CRIA.value
    if months < ADULT_AGE_MONTHS:
        return LifeStage.JUVENIL.value
    normalized = Sex.normalize(sex)
    if normalized == Sex.MALE.value:
        return LifeStage.ENGORDE.value
    if normalized == Sex.FEMALE.value:
        return LifeStage.REPRODUCTORA.value
    # Adults of unknown sex stay juvenile until someone sexes them
    return LifeStage.JUVENIL.value


def derive_purpose(stage: str | None) -> str:
    if stage == LifeStage.ENGORDE.value:
        return Purpose.ENGORDE.value
    if stage in (LifeStage.REPRODUCTORA.value, LifeStage.REPRODUCTOR.value):
        return Purpose.REPRODUCCION.value
    return Purpose.INDEFINIDO.value


def purpose_change_violation(age_months: int, sex: str | None, purpose: str) -> str | None:
    """Return the rule an explicit purpose change breaks, or None when it is allowed."""
    if age_months < MIN_PURPOSE_CHANGE_MONTHS:
        return "Animal too young: purpose cannot change before 2 months of age"
    if purpose == Purpose.REPRODUCCION.value:
        if Sex.normalize(sex) == Sex.MALE.value:
            if age_months < MIN_BREEDING_MALE_MONTHS:
                return "Males need 4+ months to be assigned to breeding"
        elif age_months < MIN_BREEDING_FEMALE_MONTHS:
            return "Females need 3+ months to be assigned to breeding"
    return None


def stage_from_age_days(age_days: float, sex: str | None) -> tuple[str, str]:
    """Stage and purpose for a freshly registered animal of a known age in days.

    Used when seeding a cage from a distribution; young animals carry their
    stage as purpose until they are old enough to be assigned one.
    """
    months = math.floor(age_days / DAYS_PER_MONTH)
    if months < 1:
        return LifeStage.CRIA.value, LifeStage.CRIA.value
    if months < 2:
        return LifeStage.JUVENIL.value, LifeStage.JUVENIL.value
    if Sex.normalize(sex) == Sex.MALE.value:
        return LifeStage.ENGORDE.value, Purpose.ENGORDE.value
    if months >= MIN_BREEDING_FEMALE_MONTHS:
        return LifeStage.REPRODUCTORA.value, Purpose.REPRODUCCION.value
    return LifeStage.ENGORDE.value, Purpose.ENGORDE.value


def suggest_stage(age_months: int, sex: str | None, purpose: str | None, current_stage: str | None) -> str:
    if current_stage in PINNED_STAGES:
        return current_stage
    if age_months < JUVENILE_AGE_MONTHS:
        return LifeStage.CRIA.value
    if age_months < ADULT_AGE_MONTHS:
        return LifeStage.JUVENIL.value
    normalized = Sex.normalize(sex)
    breeding = purpose == Purpose.REPRODUCCION.value
    if normalized == Sex.MALE.value:
        if breeding:
            if age_months >= BREEDING_MALE_AGE_MONTHS:
                return LifeStage.REPRODUCTOR.value
            return LifeStage.JUVENIL.value
        return LifeStage.ENGORDE.value
    if normalized == Sex.FEMALE.value:
        return LifeStage.REPRODUCTORA.value if breeding else LifeStage.ENGORDE.value
    return LifeStage.JUVENIL.value


@dataclass(slots=True, frozen=True)
class UpcomingStage:
    next_stage: str
    days_remaining: int


def next_stage_within(
    birth_date: date,
    sex: str | None,
    current_stage: str | None,
    today: date,
    days_ahead: int,
) -> UpcomingStage | None:
    """The age-driven transition an animal reaches within ``days_ahead`` days, if any.

    Only Cría -> Juvenil and Juvenil -> adult are age driven. Overdue
    transitions are reported with zero days remaining.
    """
    if current_stage == LifeStage.CRIA.value:
        threshold = JUVENILE_AGE_MONTHS
        target = LifeStage.JUVENIL.value
    elif current_stage == LifeStage.JUVENIL.value:
        threshold = ADULT_AGE_MONTHS
        target = (
            LifeStage.ENGORDE.value
            if Sex.normalize(sex) == Sex.MALE.value
            else LifeStage.REPRODUCTORA.value
        )
    else:
        return None
    remaining = (shift_months(birth_date, threshold) - today).days
    if remaining > days_ahead:
        return None
    return UpcomingStage(next_stage=target, days_remaining=max(0, remaining))
