from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class CuyORM(Base):
    __tablename__ = "cuyes"
    __table_args__ = (Index("ix_cuyes_shed_cage", "shed", "cage"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    breed: Mapped[str] = mapped_column(String(128), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    sex: Mapped[str] = mapped_column(String(1), nullable=False)
    weight: Mapped[Decimal] = mapped_column(Numeric(8, 3), nullable=False)
    shed: Mapped[str] = mapped_column(String(128), nullable=False)
    cage: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default="Activo", index=True
    )
    life_stage: Mapped[str | None] = mapped_column(String(32), nullable=True)
    purpose: Mapped[str | None] = mapped_column(String(32), nullable=True)
    last_evaluation: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
