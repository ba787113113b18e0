from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.feed_items import FeedItemsRepository
from src.domain.models.feed_item import FeedItem
from src.infrastructure.db.orm.feed_item import FeedItemORM


class FeedItemsSQLAlchemyRepository(FeedItemsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def to_domain(orm: FeedItemORM) -> FeedItem:
        return FeedItem(
            id=orm.id,
            name=orm.name,
            unit=orm.unit,
            stock=Decimal(orm.stock),
            unit_cost=Decimal(orm.unit_cost),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, item: FeedItem) -> FeedItem:
        orm = FeedItemORM(
            name=item.name,
            unit=item.unit,
            stock=item.stock,
            unit_cost=item.unit_cost,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Invalid feed item") from exc
        return self.to_domain(orm)

    async def get(self, item_id: int) -> FeedItem | None:
        stmt = (
            select(FeedItemORM)
            .where(FeedItemORM.id == item_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self.to_domain(orm) if orm else None

    async def get_for_update(self, item_id: int) -> FeedItem | None:
        # Row lock held until the unit of work ends; serializes check-then-decrement
        stmt = (
            select(FeedItemORM)
            .where(FeedItemORM.id == item_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self.to_domain(orm) if orm else None

    async def increment_stock(self, item_id: int, quantity: Decimal) -> None:
        stmt = (
            update(FeedItemORM)
            .where(FeedItemORM.id == item_id)
            .values(stock=FeedItemORM.stock + quantity, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def decrement_stock(self, item_id: int, quantity: Decimal) -> bool:
        # Guarded so stock can never go below zero, even without row locks (SQLite)
        stmt = (
            update(FeedItemORM)
            .where(FeedItemORM.id == item_id)
            .where(FeedItemORM.stock >= quantity)
            .values(stock=FeedItemORM.stock - quantity, updated_at=func.now())
            .returning(FeedItemORM.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
