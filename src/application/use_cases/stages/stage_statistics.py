from __future__ import annotations

from dataclasses import dataclass

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.cuy_status import INACTIVE_STATUSES


@dataclass(slots=True)
class StageCount:
    stage: str | None
    total: int


async def execute(uow: UnitOfWork) -> list[StageCount]:
    rows = await uow.cuyes.count_by_stage(exclude_statuses=INACTIVE_STATUSES)
    return [StageCount(stage=stage, total=total) for stage, total in rows]
