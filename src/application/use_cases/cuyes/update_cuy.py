from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.cuyes.create_cuy import require_sex, require_status
from src.application.validation import require_id, require_positive, require_text, to_date
from src.domain.models.cuy import Cuy
from src.domain.services.classification import derive_purpose, derive_stage
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateCuyInput:
    breed: str | None = None
    birth_date: date | str | None = None
    sex: str | None = None
    weight: Decimal | None = None
    shed: str | None = None
    cage: str | None = None
    status: str | None = None
    life_stage: str | None = None
    purpose: str | None = None


async def execute(
    uow: UnitOfWork,
    cuy_id: int,
    payload: UpdateCuyInput,
    *,
    today: date | None = None,
) -> Cuy | None:
    """Apply a partial update.

    A new birth date or sex re-derives the stage; when the result differs
    from the current one both stage and purpose are overwritten, discarding
    any manual values. Without such a change, explicit stage/purpose values
    are stored as given.
    """
    today = today or local_today()
    cuy_id = require_id(cuy_id, "cuy id")
    birth_date = to_date(payload.birth_date, "birth_date") if payload.birth_date else None
    if birth_date and birth_date > today:
        raise ValidationError("birth_date cannot be in the future")
    sex = require_sex(payload.sex) if payload.sex is not None else None

    existing = await uow.cuyes.get(cuy_id)
    if not existing:
        return None

    birth_changed = birth_date is not None and birth_date != existing.birth_date
    sex_changed = sex is not None and sex != existing.sex

    if payload.breed is not None:
        existing.breed = require_text(payload.breed, "breed")
    if payload.weight is not None:
        existing.weight = require_positive(payload.weight, "weight")
    if payload.shed is not None:
        existing.shed = require_text(payload.shed, "shed")
    if payload.cage is not None:
        existing.cage = require_text(payload.cage, "cage")
    if payload.status is not None:
        existing.status = require_status(payload.status)
    if birth_date is not None:
        existing.birth_date = birth_date
    if sex is not None:
        existing.sex = sex

    stage = payload.life_stage or existing.life_stage
    purpose = payload.purpose or existing.purpose
    if birth_changed or sex_changed:
        recomputed = derive_stage(existing.birth_date, existing.sex, today)
        if recomputed != stage:
            logger.info("Cuy %s re-derived: %s -> %s", cuy_id, stage, recomputed)
            stage = recomputed
            purpose = derive_purpose(recomputed)
    existing.life_stage = stage
    existing.purpose = purpose
    existing.mark_evaluated()

    updated = await uow.cuyes.update(existing)
    await uow.commit()
    return updated
