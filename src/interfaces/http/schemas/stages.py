from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StageTransitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cuy_id: int
    current_stage: str | None
    suggested_stage: str
    age_months: int
    sex: str
    purpose: str | None


class UpcomingTransitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cuy_id: int
    breed: str
    sex: str
    current_stage: str | None
    next_stage: str
    days_remaining: int
    age_months: int


class StageCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    stage: str | None
    total: int


class StageChangeRequest(BaseModel):
    stage: str = Field(min_length=1)
    reason: str | None = None


class StageChangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    previous_stage: str | None
    new_stage: str


class PurposeUpdateRequest(BaseModel):
    purpose: str = Field(min_length=1)
