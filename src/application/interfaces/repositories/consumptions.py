from __future__ import annotations

from datetime import date
from typing import Protocol

from src.domain.models.consumption import ConsumptionRecord


class ConsumptionsRepository(Protocol):
    async def add(self, record: ConsumptionRecord) -> ConsumptionRecord: ...

    async def get(self, record_id: int, *, lock: bool = False) -> ConsumptionRecord | None: ...

    async def update(self, record: ConsumptionRecord) -> ConsumptionRecord: ...

    async def delete(self, record_id: int) -> bool: ...

    async def list(
        self,
        *,
        shed: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ConsumptionRecord]: ...
