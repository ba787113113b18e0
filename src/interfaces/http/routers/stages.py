from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.application.use_cases.stages import (
    apply_stage_transition,
    evaluate_transitions,
    stage_statistics,
    update_purpose,
    upcoming_transitions,
)
from src.config.settings import Settings
from src.interfaces.http.deps import get_app_settings, get_today, get_uow
from src.interfaces.http.schemas.cuyes import CuyResponse
from src.interfaces.http.schemas.stages import (
    PurposeUpdateRequest,
    StageChangeRequest,
    StageChangeResponse,
    StageCountResponse,
    StageTransitionResponse,
    UpcomingTransitionResponse,
)

router = APIRouter(prefix="/stages", tags=["stages"])


@router.get("/transitions/evaluate", response_model=list[StageTransitionResponse])
async def evaluate_transitions_endpoint(
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    return await evaluate_transitions.execute(
        uow,
        today=today,
        interval_hours=settings.stage_evaluation_interval_hours,
    )


@router.get("/transitions/upcoming", response_model=list[UpcomingTransitionResponse])
async def upcoming_transitions_endpoint(
    days: int = Query(default=7, ge=0),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
):
    return await upcoming_transitions.execute(uow, days_ahead=days, today=today)


@router.get("/statistics", response_model=list[StageCountResponse])
async def stage_statistics_endpoint(uow=Depends(get_uow)):
    return await stage_statistics.execute(uow)


@router.post("/{cuy_id}/transition", response_model=StageChangeResponse)
async def apply_transition_endpoint(
    cuy_id: int,
    payload: StageChangeRequest,
    uow=Depends(get_uow),
):
    return await apply_stage_transition.execute(uow, cuy_id, payload.stage, payload.reason)


@router.patch("/{cuy_id}/purpose", response_model=CuyResponse)
async def update_purpose_endpoint(
    cuy_id: int,
    payload: PurposeUpdateRequest,
    today: date = Depends(get_today),
    uow=Depends(get_uow),
):
    return await update_purpose.execute(uow, cuy_id, payload.purpose, today=today)
