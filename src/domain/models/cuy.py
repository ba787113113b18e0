from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from src.domain.value_objects.cuy_status import CuyStatus


@dataclass(slots=True)
class Cuy:
    id: int | None
    breed: str
    birth_date: date
    sex: str
    weight: Decimal
    shed: str
    cage: str
    status: str = CuyStatus.ACTIVE.value
    life_stage: str | None = None
    purpose: str | None = None
    last_evaluation: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        breed: str,
        birth_date: date,
        sex: str,
        weight: Decimal,
        shed: str,
        cage: str,
        status: str = CuyStatus.ACTIVE.value,
        life_stage: str | None = None,
        purpose: str | None = None,
    ) -> Cuy:
        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            breed=breed,
            birth_date=birth_date,
            sex=sex,
            weight=weight,
            shed=shed,
            cage=cage,
            status=status,
            life_stage=life_stage,
            purpose=purpose,
            last_evaluation=now,
            created_at=now,
            updated_at=now,
        )

    def mark_evaluated(self) -> None:
        now = datetime.now(timezone.utc)
        self.last_evaluation = now
        self.updated_at = now
