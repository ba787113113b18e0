from __future__ import annotations

import logging
from datetime import date

from src.application.errors import TransitionRejected
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import require_id, require_text
from src.domain.models.cuy import Cuy
from src.domain.services.classification import age_in_months, purpose_change_violation
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    cuy_id: int,
    purpose: str,
    life_stage: str,
    *,
    today: date | None = None,
) -> Cuy | None:
    """Explicitly reassign purpose and stage, subject to the age rules.

    Returns None when the animal does not exist; raises TransitionRejected
    when its age (or age and sex) does not allow the change.
    """
    today = today or local_today()
    cuy_id = require_id(cuy_id, "cuy id")
    purpose = require_text(purpose, "purpose")
    life_stage = require_text(life_stage, "life_stage")

    cuy = await uow.cuyes.get(cuy_id)
    if not cuy:
        return None

    age = age_in_months(cuy.birth_date, today)
    violation = purpose_change_violation(age, cuy.sex, purpose)
    if violation:
        logger.info("Purpose change for cuy %s rejected: %s", cuy_id, violation)
        raise TransitionRejected(
            violation,
            details={"cuy_id": cuy_id, "age_months": age, "sex": cuy.sex, "purpose": purpose},
        )

    cuy.purpose = purpose
    cuy.life_stage = life_stage
    cuy.mark_evaluated()
    updated = await uow.cuyes.update(cuy)
    await uow.commit()
    return updated
