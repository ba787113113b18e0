from __future__ import annotations

from datetime import date

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.cuyes.projection import with_current_stage
from src.application.validation import require_id
from src.domain.models.cuy import Cuy
from src.utils.datetime_tz import local_today


async def execute(uow: UnitOfWork, cuy_id: int, *, today: date | None = None) -> Cuy | None:
    cuy = await uow.cuyes.get(require_id(cuy_id, "cuy id"))
    if not cuy:
        return None
    return with_current_stage(cuy, today or local_today())
