from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, NotFound
from src.application.interfaces.repositories.consumptions import ConsumptionsRepository
from src.domain.models.consumption import ConsumptionRecord
from src.infrastructure.db.orm.consumption import ConsumptionORM
from src.infrastructure.db.orm.feed_item import FeedItemORM
from src.infrastructure.repos.feed_items_sqlalchemy import FeedItemsSQLAlchemyRepository


class ConsumptionsSQLAlchemyRepository(ConsumptionsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ConsumptionORM, feed: FeedItemORM | None = None) -> ConsumptionRecord:
        return ConsumptionRecord(
            id=orm.id,
            shed=orm.shed,
            date=orm.date,
            feed_item_id=orm.feed_item_id,
            quantity=Decimal(orm.quantity),
            feed_item=FeedItemsSQLAlchemyRepository.to_domain(feed) if feed else None,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    def _joined(self):
        return (
            select(ConsumptionORM, FeedItemORM)
            .join(FeedItemORM, FeedItemORM.id == ConsumptionORM.feed_item_id)
            .execution_options(populate_existing=True)
        )

    async def add(self, record: ConsumptionRecord) -> ConsumptionRecord:
        orm = ConsumptionORM(
            shed=record.shed,
            date=record.date,
            feed_item_id=record.feed_item_id,
            quantity=record.quantity,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Consumption references a missing feed item") from exc
        created = await self.get(orm.id)
        return created if created else self._to_domain(orm)

    async def get(self, record_id: int, *, lock: bool = False) -> ConsumptionRecord | None:
        stmt = self._joined().where(ConsumptionORM.id == record_id)
        if lock:
            stmt = stmt.with_for_update(of=ConsumptionORM)
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        orm, feed = row
        return self._to_domain(orm, feed)

    async def update(self, record: ConsumptionRecord) -> ConsumptionRecord:
        orm = await self.session.get(ConsumptionORM, record.id)
        if not orm:
            raise NotFound(f"Consumption {record.id} not found")
        orm.shed = record.shed
        orm.date = record.date
        orm.feed_item_id = record.feed_item_id
        orm.quantity = record.quantity
        orm.updated_at = record.updated_at
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Consumption references a missing feed item") from exc
        updated = await self.get(orm.id)
        return updated if updated else self._to_domain(orm)

    async def delete(self, record_id: int) -> bool:
        stmt = (
            delete(ConsumptionORM)
            .where(ConsumptionORM.id == record_id)
            .returning(ConsumptionORM.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list(
        self,
        *,
        shed: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ConsumptionRecord]:
        stmt = self._joined()
        if shed is not None:
            stmt = stmt.where(ConsumptionORM.shed == shed)
        if date_from is not None:
            stmt = stmt.where(ConsumptionORM.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(ConsumptionORM.date <= date_to)
        stmt = stmt.order_by(ConsumptionORM.date.desc(), ConsumptionORM.shed.asc(), ConsumptionORM.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm, feed) for orm, feed in result.all()]
