from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


@dataclass(slots=True)
class FeedItem:
    id: int | None
    name: str
    unit: str
    stock: Decimal
    unit_cost: Decimal = Decimal("0")
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        name: str,
        unit: str,
        stock: Decimal,
        unit_cost: Decimal = Decimal("0"),
    ) -> FeedItem:
        if stock < 0:
            raise ValueError("Feed stock cannot be negative")
        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            name=name,
            unit=unit,
            stock=stock,
            unit_cost=unit_cost,
            created_at=now,
            updated_at=now,
        )

    def can_supply(self, quantity: Decimal) -> bool:
        return self.stock >= quantity
