from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import NotFound
from src.application.interfaces.repositories.cuyes import CuyRepository
from src.domain.models.cuy import Cuy
from src.infrastructure.db.orm.cuy import CuyORM


class CuyesSQLAlchemyRepository(CuyRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CuyORM) -> Cuy:
        return Cuy(
            id=orm.id,
            breed=orm.breed,
            birth_date=orm.birth_date,
            sex=orm.sex,
            weight=Decimal(orm.weight),
            shed=orm.shed,
            cage=orm.cage,
            status=orm.status,
            life_stage=orm.life_stage,
            purpose=orm.purpose,
            last_evaluation=orm.last_evaluation,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    @staticmethod
    def _exclude(stmt, exclude_statuses: Sequence[str] | None):
        if exclude_statuses:
            stmt = stmt.where(CuyORM.status.not_in(list(exclude_statuses)))
        return stmt

    async def add(self, cuy: Cuy) -> Cuy:
        orm = CuyORM(
            breed=cuy.breed,
            birth_date=cuy.birth_date,
            sex=cuy.sex,
            weight=cuy.weight,
            shed=cuy.shed,
            cage=cuy.cage,
            status=cuy.status,
            life_stage=cuy.life_stage,
            purpose=cuy.purpose,
            last_evaluation=cuy.last_evaluation,
            created_at=cuy.created_at,
            updated_at=cuy.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, cuy_id: int) -> Cuy | None:
        stmt = select(CuyORM).where(CuyORM.id == cuy_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        shed: str | None = None,
        cage: str | None = None,
        exclude_statuses: Sequence[str] | None = None,
        evaluated_before: datetime | None = None,
    ) -> list[Cuy]:
        stmt = select(CuyORM)
        if shed is not None:
            stmt = stmt.where(CuyORM.shed == shed)
        if cage is not None:
            stmt = stmt.where(CuyORM.cage == cage)
        stmt = self._exclude(stmt, exclude_statuses)
        if evaluated_before is not None:
            stmt = stmt.where(
                or_(CuyORM.last_evaluation.is_(None), CuyORM.last_evaluation < evaluated_before)
            )
        stmt = stmt.order_by(CuyORM.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def update(self, cuy: Cuy) -> Cuy:
        orm = await self.session.get(CuyORM, cuy.id)
        if not orm:
            raise NotFound(f"Cuy {cuy.id} not found")
        orm.breed = cuy.breed
        orm.birth_date = cuy.birth_date
        orm.sex = cuy.sex
        orm.weight = cuy.weight
        orm.shed = cuy.shed
        orm.cage = cuy.cage
        orm.status = cuy.status
        orm.life_stage = cuy.life_stage
        orm.purpose = cuy.purpose
        orm.last_evaluation = cuy.last_evaluation
        orm.updated_at = cuy.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def delete(self, cuy_id: int) -> bool:
        stmt = (
            delete(CuyORM)
            .where(CuyORM.id == cuy_id)
            .returning(CuyORM.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def mark_evaluated(self, cuy_ids: Sequence[int], at: datetime) -> None:
        if not cuy_ids:
            return
        stmt = (
            update(CuyORM)
            .where(CuyORM.id.in_(list(cuy_ids)))
            .values(last_evaluation=at)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def count(self, *, sex: str | None = None, exclude_statuses: Sequence[str] | None = None) -> int:
        stmt = select(func.count(CuyORM.id))
        if sex is not None:
            stmt = stmt.where(CuyORM.sex == sex)
        stmt = self._exclude(stmt, exclude_statuses)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_born_after(self, cutoff: date, *, exclude_statuses: Sequence[str] | None = None) -> int:
        stmt = select(func.count(CuyORM.id)).where(CuyORM.birth_date > cutoff)
        stmt = self._exclude(stmt, exclude_statuses)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_breed(self, *, exclude_statuses: Sequence[str] | None = None) -> list[tuple[str, int]]:
        stmt = select(CuyORM.breed, func.count(CuyORM.id)).group_by(CuyORM.breed)
        stmt = self._exclude(stmt, exclude_statuses).order_by(CuyORM.breed)
        result = await self.session.execute(stmt)
        return [(breed, int(total)) for breed, total in result.all()]

    async def count_by_stage(
        self, *, exclude_statuses: Sequence[str] | None = None
    ) -> list[tuple[str | None, int]]:
        stmt = select(CuyORM.life_stage, func.count(CuyORM.id)).group_by(CuyORM.life_stage)
        stmt = self._exclude(stmt, exclude_statuses).order_by(CuyORM.life_stage)
        result = await self.session.execute(stmt)
        return [(stage, int(total)) for stage, total in result.all()]
