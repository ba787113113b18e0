from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import require_id, require_text

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StageChange:
    previous_stage: str | None
    new_stage: str


async def execute(
    uow: UnitOfWork,
    cuy_id: int,
    new_stage: str,
    reason: str | None = None,
) -> StageChange:
    cuy_id = require_id(cuy_id, "cuy id")
    new_stage = require_text(new_stage, "stage")
    cuy = await uow.cuyes.get(cuy_id)
    if not cuy:
        raise NotFound(f"Cuy {cuy_id} not found")

    previous = cuy.life_stage
    cuy.life_stage = new_stage
    cuy.mark_evaluated()
    await uow.cuyes.update(cuy)
    await uow.commit()
    logger.info("Cuy %s stage %s -> %s (%s)", cuy_id, previous, new_stage, reason or "manual")
    return StageChange(previous_stage=previous, new_stage=new_stage)
