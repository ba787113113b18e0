from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from typing import Protocol

from src.domain.models.cuy import Cuy


class CuyRepository(Protocol):
    async def add(self, cuy: Cuy) -> Cuy: ...

    async def get(self, cuy_id: int) -> Cuy | None: ...

    async def list(
        self,
        *,
        shed: str | None = None,
        cage: str | None = None,
        exclude_statuses: Sequence[str] | None = None,
        evaluated_before: datetime | None = None,
    ) -> list[Cuy]: ...

    async def update(self, cuy: Cuy) -> Cuy: ...

    async def delete(self, cuy_id: int) -> bool: ...

    async def mark_evaluated(self, cuy_ids: Sequence[int], at: datetime) -> None: ...

    async def count(self, *, sex: str | None = None, exclude_statuses: Sequence[str] | None = None) -> int: ...

    async def count_born_after(self, cutoff: date, *, exclude_statuses: Sequence[str] | None = None) -> int: ...

    async def count_by_breed(self, *, exclude_statuses: Sequence[str] | None = None) -> list[tuple[str, int]]: ...

    async def count_by_stage(self, *, exclude_statuses: Sequence[str] | None = None) -> list[tuple[str | None, int]]: ...
