from __future__ import annotations

import logging

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.feeding import stock
from src.application.validation import require_id

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, consumption_id: int) -> bool:
    consumption_id = require_id(consumption_id, "consumption id")
    existing = await uow.consumptions.get(consumption_id, lock=True)
    if not existing:
        return False
    # Only the transaction that actually removed the row gives the stock back
    if not await uow.consumptions.delete(consumption_id):
        await uow.rollback()
        return False
    await stock.restore(uow, existing.feed_item_id, existing.quantity)
    await uow.commit()
    logger.info(
        "Consumption %s deleted, %s returned to feed item %s",
        consumption_id,
        existing.quantity,
        existing.feed_item_id,
    )
    return True
