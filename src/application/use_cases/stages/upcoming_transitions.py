from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.classification import age_in_months, next_stage_within
from src.domain.value_objects.cuy_status import INACTIVE_STATUSES
from src.utils.datetime_tz import local_today


@dataclass(slots=True)
class UpcomingTransition:
    cuy_id: int
    breed: str
    sex: str
    current_stage: str | None
    next_stage: str
    days_remaining: int
    age_months: int


async def execute(
    uow: UnitOfWork,
    *,
    days_ahead: int = 7,
    today: date | None = None,
) -> list[UpcomingTransition]:
    if days_ahead < 0:
        raise ValidationError("days_ahead cannot be negative")
    today = today or local_today()
    cuyes = await uow.cuyes.list(exclude_statuses=INACTIVE_STATUSES)

    upcoming: list[UpcomingTransition] = []
    for cuy in cuyes:
        nxt = next_stage_within(cuy.birth_date, cuy.sex, cuy.life_stage, today, days_ahead)
        if nxt is None:
            continue
        upcoming.append(
            UpcomingTransition(
                cuy_id=cuy.id,
                breed=cuy.breed,
                sex=cuy.sex,
                current_stage=cuy.life_stage,
                next_stage=nxt.next_stage,
                days_remaining=nxt.days_remaining,
                age_months=age_in_months(cuy.birth_date, today),
            )
        )
    upcoming.sort(key=lambda item: (item.days_remaining, item.cuy_id))
    return upcoming
