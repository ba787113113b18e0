from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.classification import shift_months
from src.domain.value_objects.cuy_status import CuyStatus
from src.domain.value_objects.sex import Sex
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)

EXCLUDED = (CuyStatus.SOLD.value,)
# Dashboard counts animals younger than this as crías
YOUNG_AGE_MONTHS = 2


@dataclass(slots=True)
class BreedCount:
    breed: str
    total: int


@dataclass(slots=True)
class CuyStats:
    total: int = 0
    male: int = 0
    female: int = 0
    under_two_months: int = 0
    adults: int = 0
    by_breed: list[BreedCount] = field(default_factory=list)
    available: bool = True

    @classmethod
    def unavailable(cls) -> CuyStats:
        return cls(available=False)


async def execute(uow: UnitOfWork, *, today: date | None = None) -> CuyStats:
    """Herd counts for the dashboard.

    Sold animals are left out of every figure except ``total``. A failing
    query yields ``CuyStats.unavailable()`` so the caller can tell missing
    numbers apart from a real empty herd.
    """
    today = today or local_today()
    cutoff = shift_months(today, -YOUNG_AGE_MONTHS)
    try:
        total = await uow.cuyes.count()
        male = await uow.cuyes.count(sex=Sex.MALE.value, exclude_statuses=EXCLUDED)
        female = await uow.cuyes.count(sex=Sex.FEMALE.value, exclude_statuses=EXCLUDED)
        young = await uow.cuyes.count_born_after(cutoff, exclude_statuses=EXCLUDED)
        breeds = await uow.cuyes.count_by_breed(exclude_statuses=EXCLUDED)
    except Exception:
        logger.exception("Cuy statistics unavailable")
        return CuyStats.unavailable()

    return CuyStats(
        total=total,
        male=male,
        female=female,
        under_two_months=young,
        adults=total - young,
        by_breed=[BreedCount(breed=breed, total=count) for breed, count in breeds],
    )
