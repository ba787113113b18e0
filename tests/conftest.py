from __future__ import annotations

import os
import random
import sys
from collections.abc import AsyncIterator
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import cast

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import consumption, cuy, feed_item  # noqa: F401
from src.infrastructure.db.orm.cuy import CuyORM
from src.infrastructure.db.orm.feed_item import FeedItemORM
from src.interfaces.http.deps import get_today
from src.interfaces.http.main import create_app

TODAY = date(2025, 6, 15)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
def app(test_settings: Settings, today: date):
    app = create_app(settings=test_settings)
    app.dependency_overrides[get_today] = lambda: today
    app.state.rng = random.Random(7)
    return app


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()


@pytest.fixture()
def seed_feed_item(app, client):
    async def _seed(
        name: str = "Alfalfa",
        unit: str = "kg",
        stock: str = "100",
        unit_cost: str = "2",
    ) -> int:
        async with app.state.session_factory() as session:  # type: ignore[attr-defined]
            async_session = cast(AsyncSession, session)
            orm = FeedItemORM(
                name=name,
                unit=unit,
                stock=Decimal(stock),
                unit_cost=Decimal(unit_cost),
            )
            async_session.add(orm)
            await async_session.commit()
            return orm.id

    return _seed


@pytest.fixture()
def feed_stock(app, client):
    async def _stock(item_id: int) -> Decimal:
        async with app.state.session_factory() as session:  # type: ignore[attr-defined]
            orm = await cast(AsyncSession, session).get(FeedItemORM, item_id)
            assert orm is not None
            return Decimal(orm.stock)

    return _stock


@pytest.fixture()
def seed_cuy(app, client):
    async def _seed(**overrides) -> int:
        values = {
            "breed": "Peru",
            "birth_date": date(2025, 1, 10),
            "sex": "M",
            "weight": Decimal("0.800"),
            "shed": "G1",
            "cage": "J1",
            "status": "Activo",
            "life_stage": None,
            "purpose": None,
            "last_evaluation": None,
        }
        values.update(overrides)
        async with app.state.session_factory() as session:  # type: ignore[attr-defined]
            async_session = cast(AsyncSession, session)
            orm = CuyORM(**values)
            async_session.add(orm)
            await async_session.commit()
            return orm.id

    return _seed
