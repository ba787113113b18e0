from __future__ import annotations

from datetime import date as DtDate
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ConsumptionCreate(BaseModel):
    shed: str = Field(min_length=1)
    date: DtDate | None = None
    feed_item_id: int = Field(gt=0)
    quantity: Decimal = Field(gt=0, decimal_places=3)


class ConsumptionUpdate(BaseModel):
    shed: str | None = Field(default=None, min_length=1)
    date: DtDate | None = None
    feed_item_id: int | None = Field(default=None, gt=0)
    quantity: Decimal | None = Field(default=None, gt=0, decimal_places=3)


class FeedItemSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    unit: str
    stock: Decimal
    unit_cost: Decimal


class ConsumptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    shed: str
    date: DtDate
    feed_item_id: int
    quantity: Decimal
    cost: Decimal
    feed_item: FeedItemSummary | None = None
    created_at: datetime
    updated_at: datetime


class ConsumptionDeleteResponse(BaseModel):
    deleted: bool


class ConsumptionTotalsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quantity: Decimal
    cost: Decimal
    unit: str | None = None


class ConsumptionStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_count: int
    total_cost: Decimal
    by_shed: dict[str, ConsumptionTotalsResponse]
    by_feed_item: dict[str, ConsumptionTotalsResponse]
