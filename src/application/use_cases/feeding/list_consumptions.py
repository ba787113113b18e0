from __future__ import annotations

from datetime import date

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import require_text
from src.domain.models.consumption import ConsumptionRecord


def ensure_range(date_from: date | None, date_to: date | None) -> None:
    if date_from and date_to and date_from > date_to:
        raise ValidationError("date_from must be on or before date_to")


async def execute(
    uow: UnitOfWork,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ConsumptionRecord]:
    ensure_range(date_from, date_to)
    return await uow.consumptions.list(date_from=date_from, date_to=date_to)


async def by_shed(
    uow: UnitOfWork,
    shed: str,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ConsumptionRecord]:
    ensure_range(date_from, date_to)
    return await uow.consumptions.list(
        shed=require_text(shed, "shed"),
        date_from=date_from,
        date_to=date_to,
    )
