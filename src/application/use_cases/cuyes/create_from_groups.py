from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from src.application.errors import PartialBatchError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.cuyes.create_cuy import require_sex
from src.application.validation import require_text
from src.domain.models.cuy import Cuy
from src.domain.services.classification import stage_from_age_days
from src.domain.value_objects.cuy_status import CuyStatus
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)

MIN_WEIGHT_KG = Decimal("0.050")
DEFAULT_AGE_VARIANCE_DAYS = 3
DEFAULT_WEIGHT_VARIANCE_GRAMS = 50


@dataclass(slots=True)
class CuyGroup:
    sex: str
    count: int
    target_age_days: float
    target_weight_grams: float
    age_variance: float | None = None
    weight_variance: float | None = None


@dataclass(slots=True)
class CageRegistrationInput:
    shed: str
    cage: str
    breed: str
    groups: list[CuyGroup] = field(default_factory=list)


def _validate_group(index: int, group: CuyGroup) -> None:
    label = f"groups[{index}]"
    require_sex(group.sex)
    if isinstance(group.count, bool) or not isinstance(group.count, int) or group.count < 1:
        raise ValidationError(f"{label}.count must be a positive integer")
    if group.target_age_days is None or group.target_age_days < 0:
        raise ValidationError(f"{label}.target_age_days cannot be negative")
    if group.target_weight_grams is None or group.target_weight_grams <= 0:
        raise ValidationError(f"{label}.target_weight_grams must be greater than 0")
    for name in ("age_variance", "weight_variance"):
        value = getattr(group, name)
        if value is not None and value < 0:
            raise ValidationError(f"{label}.{name} cannot be negative")


def sample_weight_kg(target_grams: float, variance: float, rng: random.Random) -> Decimal:
    grams = target_grams + rng.uniform(-variance, variance)
    kg = (Decimal(round(grams)) / 1000).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    return max(MIN_WEIGHT_KG, kg)


def sample_age_days(target_days: float, variance: float, rng: random.Random) -> float:
    return max(0.0, target_days + rng.uniform(-variance, variance))


async def execute(
    uow: UnitOfWork,
    payload: CageRegistrationInput,
    *,
    rng: random.Random | None = None,
    today: date | None = None,
    default_age_variance: float = DEFAULT_AGE_VARIANCE_DAYS,
    default_weight_variance: float = DEFAULT_WEIGHT_VARIANCE_GRAMS,
) -> list[Cuy]:
    """Register a cage worth of animals sampled from per-group age/weight targets.

    Each animal is committed on its own. If one fails, the ones already
    stored stay and PartialBatchError reports their ids.
    """
    shed = require_text(payload.shed, "shed")
    cage = require_text(payload.cage, "cage")
    breed = require_text(payload.breed, "breed")
    if not payload.groups:
        raise ValidationError("At least one group is required")
    for index, group in enumerate(payload.groups):
        _validate_group(index, group)

    rng = rng or random.Random()
    today = today or local_today()
    created: list[Cuy] = []

    for group in payload.groups:
        sex = require_sex(group.sex)
        age_variance = (
            group.age_variance if group.age_variance is not None else default_age_variance
        )
        weight_variance = (
            group.weight_variance if group.weight_variance is not None else default_weight_variance
        )
        for _ in range(group.count):
            age_days = sample_age_days(group.target_age_days, age_variance, rng)
            life_stage, purpose = stage_from_age_days(age_days, sex)
            cuy = Cuy.create(
                breed=breed,
                birth_date=today - timedelta(days=round(age_days)),
                sex=sex,
                weight=sample_weight_kg(group.target_weight_grams, weight_variance, rng),
                shed=shed,
                cage=cage,
                status=CuyStatus.ACTIVE.value,
                life_stage=life_stage,
                purpose=purpose,
            )
            try:
                stored = await uow.cuyes.add(cuy)
                await uow.commit()
            except Exception as exc:
                await uow.rollback()
                logger.exception(
                    "Cage registration %s/%s stopped after %d animals", shed, cage, len(created)
                )
                raise PartialBatchError(
                    f"Registration stopped after {len(created)} animals",
                    details={"created": len(created), "created_ids": [c.id for c in created]},
                ) from exc
            created.append(stored)

    logger.info("Cage registration %s/%s created %d animals", shed, cage, len(created))
    return created
