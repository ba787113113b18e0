from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CuyCreate(BaseModel):
    breed: str = Field(min_length=1)
    sex: str
    weight: Decimal = Field(gt=0)
    shed: str = Field(min_length=1)
    cage: str = Field(min_length=1)
    birth_date: date | None = None
    status: str | None = None
    life_stage: str | None = None
    purpose: str | None = None


class CuyUpdate(BaseModel):
    breed: str | None = None
    birth_date: date | None = None
    sex: str | None = None
    weight: Decimal | None = Field(default=None, gt=0)
    shed: str | None = None
    cage: str | None = None
    status: str | None = None
    life_stage: str | None = None
    purpose: str | None = None


class CuyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    breed: str
    birth_date: date
    sex: str
    weight: Decimal
    shed: str
    cage: str
    status: str
    life_stage: str | None
    purpose: str | None
    last_evaluation: datetime | None
    created_at: datetime
    updated_at: datetime


class PurposeChangeRequest(BaseModel):
    purpose: str = Field(min_length=1)
    life_stage: str = Field(min_length=1)


class CuyGroupRequest(BaseModel):
    sex: str
    count: int = Field(ge=1)
    target_age_days: float = Field(ge=0)
    target_weight_grams: float = Field(gt=0)
    age_variance: float | None = Field(default=None, ge=0)
    weight_variance: float | None = Field(default=None, ge=0)


class CageRegistrationRequest(BaseModel):
    shed: str = Field(min_length=1)
    cage: str = Field(min_length=1)
    breed: str = Field(min_length=1)
    groups: list[CuyGroupRequest] = Field(min_length=1)


class BreedCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    breed: str
    total: int


class CuyStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    male: int
    female: int
    under_two_months: int
    adults: int
    by_breed: list[BreedCountResponse]
    available: bool
