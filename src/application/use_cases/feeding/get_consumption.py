from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import require_id
from src.domain.models.consumption import ConsumptionRecord


async def execute(uow: UnitOfWork, consumption_id: int) -> ConsumptionRecord | None:
    return await uow.consumptions.get(require_id(consumption_id, "consumption id"))
