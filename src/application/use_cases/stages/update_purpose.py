from __future__ import annotations

import logging
from datetime import date

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import require_id, require_text
from src.domain.models.cuy import Cuy
from src.domain.services.classification import age_in_months, suggest_stage
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    cuy_id: int,
    purpose: str,
    *,
    today: date | None = None,
) -> Cuy:
    """Set the purpose and move the stage to whatever the evaluator suggests for it."""
    today = today or local_today()
    cuy_id = require_id(cuy_id, "cuy id")
    purpose = require_text(purpose, "purpose")
    cuy = await uow.cuyes.get(cuy_id)
    if not cuy:
        raise NotFound(f"Cuy {cuy_id} not found")

    cuy.purpose = purpose
    suggested = suggest_stage(age_in_months(cuy.birth_date, today), cuy.sex, purpose, cuy.life_stage)
    if suggested != cuy.life_stage:
        logger.info(
            "Cuy %s stage %s -> %s after purpose change to %s",
            cuy_id,
            cuy.life_stage,
            suggested,
            purpose,
        )
        cuy.life_stage = suggested
        cuy.mark_evaluated()
    updated = await uow.cuyes.update(cuy)
    await uow.commit()
    return updated
