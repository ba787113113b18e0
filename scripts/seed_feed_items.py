#!/usr/bin/env python3
"""
Script to register a feed item with its opening stock.

Feed inventory has no HTTP surface; this is how stock enters the ledger.

Usage:
  python scripts/seed_feed_items.py --name "Alfalfa" --unit kg --stock 100 --unit-cost 1.50
"""

import argparse
import asyncio
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.settings import get_settings
from src.domain.models.feed_item import FeedItem
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def seed_feed_item(name: str, unit: str, stock: Decimal, unit_cost: Decimal) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            item = await uow.feed_items.add(
                FeedItem.create(name=name, unit=unit, stock=stock, unit_cost=unit_cost)
            )
            await uow.commit()

        print("\n✅ Feed item created")
        print(f"   ID: {item.id}")
        print(f"   Name: {item.name}")
        print(f"   Stock: {item.stock} {item.unit}")
        print(f"   Unit cost: {item.unit_cost}")
    finally:
        await engine.dispose()


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from exc


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Register a feed item with opening stock")
    parser.add_argument("--name", required=True, help="Feed item name")
    parser.add_argument("--unit", required=True, help="Unit of measure, e.g. kg")
    parser.add_argument("--stock", type=_decimal, default=Decimal("0"), help="Opening stock")
    parser.add_argument("--unit-cost", type=_decimal, default=Decimal("0"), help="Cost per unit")
    args = parser.parse_args()

    if args.stock < 0:
        print("❌ Error: stock cannot be negative")
        sys.exit(1)

    asyncio.run(seed_feed_item(args.name, args.unit, args.stock, args.unit_cost))
