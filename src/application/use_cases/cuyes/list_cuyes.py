from __future__ import annotations

from datetime import date

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.cuyes.projection import with_current_stage
from src.domain.models.cuy import Cuy
from src.utils.datetime_tz import local_today


async def execute(
    uow: UnitOfWork,
    *,
    shed: str | None = None,
    cage: str | None = None,
    today: date | None = None,
) -> list[Cuy]:
    today = today or local_today()
    items = await uow.cuyes.list(shed=shed or None, cage=cage or None)
    return [with_current_stage(cuy, today) for cuy in items]
