"""Feed stock movements shared by the consumption use cases.

Only these helpers touch ``FeedItem.stock``; every consumption mutation goes
through them inside the caller's unit of work.
"""

from __future__ import annotations

from decimal import Decimal

from src.application.errors import InsufficientStock, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.validation import format_quantity
from src.domain.models.feed_item import FeedItem


def insufficient_stock(feed: FeedItem, requested: Decimal) -> InsufficientStock:
    available = format_quantity(feed.stock)
    wanted = format_quantity(requested)
    return InsufficientStock(
        f"Insufficient stock. Available: {available} {feed.unit}, "
        f"requested: {wanted} {feed.unit}",
        details={
            "feed_item_id": feed.id,
            "available": available,
            "requested": wanted,
            "unit": feed.unit,
        },
    )


async def ensure_available(uow: UnitOfWork, feed_item_id: int, quantity: Decimal) -> FeedItem:
    """Lock the feed item row and check it can cover ``quantity``."""
    feed = await uow.feed_items.get_for_update(feed_item_id)
    if not feed:
        raise NotFound(f"Feed item {feed_item_id} not found")
    if not feed.can_supply(quantity):
        raise insufficient_stock(feed, quantity)
    return feed


async def withdraw(uow: UnitOfWork, feed: FeedItem, quantity: Decimal) -> None:
    if not await uow.feed_items.decrement_stock(feed.id, quantity):
        # Stock moved between the check and the guarded decrement
        current = await uow.feed_items.get(feed.id)
        raise insufficient_stock(current or feed, quantity)


async def restore(uow: UnitOfWork, feed_item_id: int, quantity: Decimal) -> None:
    await uow.feed_items.increment_stock(feed_item_id, quantity)
