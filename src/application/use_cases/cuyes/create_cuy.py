from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import require_positive, require_text, to_date
from src.domain.models.cuy import Cuy
from src.domain.services.classification import derive_purpose, derive_stage
from src.domain.value_objects.cuy_status import CuyStatus
from src.domain.value_objects.sex import Sex
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateCuyInput:
    breed: str
    sex: str
    weight: Decimal
    shed: str
    cage: str
    birth_date: date | str | None = None
    status: str | None = None
    life_stage: str | None = None
    purpose: str | None = None


def require_sex(value: str | None) -> str:
    sex = Sex.normalize(value)
    if sex is None:
        raise ValidationError("sex must be 'M' or 'H'")
    return sex


def require_status(value: str | None) -> str:
    if value is None:
        return CuyStatus.ACTIVE.value
    valid = {s.value for s in CuyStatus}
    if value not in valid:
        raise ValidationError(f"Invalid status. Must be one of: {', '.join(sorted(valid))}")
    return value


async def execute(
    uow: UnitOfWork,
    payload: CreateCuyInput,
    *,
    today: date | None = None,
) -> Cuy:
    today = today or local_today()
    sex = require_sex(payload.sex)
    birth_date = to_date(payload.birth_date, "birth_date") if payload.birth_date else today
    if birth_date > today:
        raise ValidationError("birth_date cannot be in the future")

    life_stage = payload.life_stage or derive_stage(birth_date, sex, today)
    purpose = payload.purpose or derive_purpose(life_stage)

    cuy = Cuy.create(
        breed=require_text(payload.breed, "breed"),
        birth_date=birth_date,
        sex=sex,
        weight=require_positive(payload.weight, "weight"),
        shed=require_text(payload.shed, "shed"),
        cage=require_text(payload.cage, "cage"),
        status=require_status(payload.status),
        life_stage=life_stage,
        purpose=purpose,
    )
    created = await uow.cuyes.add(cuy)
    await uow.commit()
    logger.info(
        "Cuy %s created: born=%s sex=%s stage=%s purpose=%s",
        created.id,
        birth_date,
        sex,
        life_stage,
        purpose,
    )
    return created
