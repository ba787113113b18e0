from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.classification import age_in_months, suggest_stage
from src.domain.value_objects.cuy_status import INACTIVE_STATUSES
from src.utils.datetime_tz import local_today, utc_now

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StageTransition:
    cuy_id: int
    current_stage: str | None
    suggested_stage: str
    age_months: int
    sex: str
    purpose: str | None


async def execute(
    uow: UnitOfWork,
    *,
    today: date | None = None,
    now: datetime | None = None,
    interval_hours: int = 24,
) -> list[StageTransition]:
    """Suggest stage changes for living animals not evaluated within ``interval_hours``.

    Nothing is moved; every inspected animal only gets its evaluation time
    stamped so the next run skips it.
    """
    today = today or local_today()
    now = now or utc_now()
    due = await uow.cuyes.list(
        exclude_statuses=INACTIVE_STATUSES,
        evaluated_before=now - timedelta(hours=interval_hours),
    )

    transitions: list[StageTransition] = []
    for cuy in due:
        age = age_in_months(cuy.birth_date, today)
        suggested = suggest_stage(age, cuy.sex, cuy.purpose, cuy.life_stage)
        if suggested != cuy.life_stage:
            transitions.append(
                StageTransition(
                    cuy_id=cuy.id,
                    current_stage=cuy.life_stage,
                    suggested_stage=suggested,
                    age_months=age,
                    sex=cuy.sex,
                    purpose=cuy.purpose,
                )
            )

    await uow.cuyes.mark_evaluated([cuy.id for cuy in due], now)
    await uow.commit()
    logger.info("Evaluated %d cuyes, %d need a stage transition", len(due), len(transitions))
    return transitions
