from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import AppError, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.feeding import stock
from src.application.validation import require_id, require_quantity, require_text, to_date
from src.domain.models.consumption import ConsumptionRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateConsumptionInput:
    shed: str | None = None
    date: date | str | None = None
    feed_item_id: int | None = None
    quantity: Decimal | None = None


async def execute(
    uow: UnitOfWork,
    consumption_id: int,
    payload: UpdateConsumptionInput,
) -> ConsumptionRecord:
    """Reverse the record's previous withdrawal, then apply the new one.

    The reversal happens first so the stock check sees what is really
    available, including the quantity this record already held. Any failure
    rolls back both movements.
    """
    consumption_id = require_id(consumption_id, "consumption id")
    shed = require_text(payload.shed, "shed") if payload.shed is not None else None
    consumed_on = to_date(payload.date, "date") if payload.date is not None else None
    feed_item_id = (
        require_id(payload.feed_item_id, "feed_item_id") if payload.feed_item_id is not None else None
    )
    quantity = require_quantity(payload.quantity) if payload.quantity is not None else None

    try:
        existing = await uow.consumptions.get(consumption_id, lock=True)
        if not existing:
            raise NotFound(f"Consumption {consumption_id} not found")

        await stock.restore(uow, existing.feed_item_id, existing.quantity)

        if shed is not None:
            existing.shed = shed
        if consumed_on is not None:
            existing.date = consumed_on
        if feed_item_id is not None:
            existing.feed_item_id = feed_item_id
        if quantity is not None:
            existing.quantity = quantity
        existing.touch()

        feed = await stock.ensure_available(uow, existing.feed_item_id, existing.quantity)
        await uow.consumptions.update(existing)
        await stock.withdraw(uow, feed, existing.quantity)
        updated = await uow.consumptions.get(consumption_id) or existing
        await uow.commit()
    except AppError:
        await uow.rollback()
        raise

    logger.info(
        "Consumption %s updated: feed_item=%s quantity=%s",
        consumption_id,
        updated.feed_item_id,
        updated.quantity,
    )
    return updated
