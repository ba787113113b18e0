from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import AppError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.feeding import stock
from src.application.validation import require_id, require_quantity, require_text, to_date
from src.domain.models.consumption import ConsumptionRecord
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateConsumptionInput:
    shed: str
    feed_item_id: int
    quantity: Decimal
    date: date | str | None = None


async def execute(uow: UnitOfWork, payload: CreateConsumptionInput) -> ConsumptionRecord:
    shed = require_text(payload.shed, "shed")
    feed_item_id = require_id(payload.feed_item_id, "feed_item_id")
    quantity = require_quantity(payload.quantity)
    consumed_on = to_date(payload.date, "date") if payload.date is not None else local_today()

    try:
        feed = await stock.ensure_available(uow, feed_item_id, quantity)
        record = ConsumptionRecord.create(
            shed=shed,
            date=consumed_on,
            feed_item_id=feed_item_id,
            quantity=quantity,
        )
        created = await uow.consumptions.add(record)
        await stock.withdraw(uow, feed, quantity)
        created = await uow.consumptions.get(created.id) or created
        await uow.commit()
    except AppError:
        await uow.rollback()
        raise

    logger.info(
        "Consumption %s recorded: shed=%s feed_item=%s quantity=%s",
        created.id,
        shed,
        feed_item_id,
        quantity,
    )
    return created
