from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.feeding.list_consumptions import ensure_range


@dataclass(slots=True)
class ConsumptionTotals:
    quantity: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")
    unit: str | None = None


@dataclass(slots=True)
class ConsumptionStatistics:
    total_count: int = 0
    total_cost: Decimal = Decimal("0")
    by_shed: dict[str, ConsumptionTotals] = field(default_factory=dict)
    by_feed_item: dict[str, ConsumptionTotals] = field(default_factory=dict)


async def execute(
    uow: UnitOfWork,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> ConsumptionStatistics:
    ensure_range(date_from, date_to)
    records = await uow.consumptions.list(date_from=date_from, date_to=date_to)

    stats = ConsumptionStatistics(total_count=len(records))
    for record in records:
        cost = record.cost
        stats.total_cost += cost

        shed = stats.by_shed.setdefault(record.shed, ConsumptionTotals())
        shed.quantity += record.quantity
        shed.cost += cost

        name = record.feed_item.name if record.feed_item else str(record.feed_item_id)
        unit = record.feed_item.unit if record.feed_item else None
        item = stats.by_feed_item.setdefault(name, ConsumptionTotals(unit=unit))
        item.quantity += record.quantity
        item.cost += cost
    return stats
