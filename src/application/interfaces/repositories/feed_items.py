from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from src.domain.models.feed_item import FeedItem


class FeedItemsRepository(Protocol):
    async def add(self, item: FeedItem) -> FeedItem: ...

    async def get(self, item_id: int) -> FeedItem | None: ...

    async def get_for_update(self, item_id: int) -> FeedItem | None: ...

    async def increment_stock(self, item_id: int, quantity: Decimal) -> None: ...

    async def decrement_stock(self, item_id: int, quantity: Decimal) -> bool: ...
