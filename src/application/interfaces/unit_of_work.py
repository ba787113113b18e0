from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.consumptions import ConsumptionsRepository
from src.application.interfaces.repositories.cuyes import CuyRepository
from src.application.interfaces.repositories.feed_items import FeedItemsRepository


class UnitOfWork(Protocol):
    feed_items: FeedItemsRepository
    consumptions: ConsumptionsRepository
    cuyes: CuyRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
