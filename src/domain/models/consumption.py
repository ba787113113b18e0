from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from src.domain.models.feed_item import FeedItem


@dataclass(slots=True)
class ConsumptionRecord:
    id: int | None
    shed: str
    date: date
    feed_item_id: int
    quantity: Decimal
    # Joined on reads so callers can show name/unit/cost without a second query
    feed_item: FeedItem | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        shed: str,
        date: date,
        feed_item_id: int,
        quantity: Decimal,
    ) -> ConsumptionRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            shed=shed,
            date=date,
            feed_item_id=feed_item_id,
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )

    @property
    def cost(self) -> Decimal:
        if self.feed_item is None:
            return Decimal("0")
        return self.quantity * self.feed_item.unit_cost

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
