from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import require_id


async def execute(uow: UnitOfWork, cuy_id: int) -> bool:
    deleted = await uow.cuyes.delete(require_id(cuy_id, "cuy id"))
    if deleted:
        await uow.commit()
    return deleted
