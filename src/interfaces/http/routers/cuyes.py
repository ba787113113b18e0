from __future__ import annotations

import random
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.application.use_cases.cuyes import (
    change_purpose,
    create_cuy,
    create_from_groups,
    cuy_stats,
    delete_cuy,
    get_cuy,
    list_cuyes,
    update_cuy,
)
from src.config.settings import Settings
from src.interfaces.http.deps import get_app_settings, get_rng, get_today, get_uow
from src.interfaces.http.schemas.cuyes import (
    CageRegistrationRequest,
    CuyCreate,
    CuyResponse,
    CuyStatsResponse,
    CuyUpdate,
    PurposeChangeRequest,
)

router = APIRouter(prefix="/cuyes", tags=["cuyes"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cuy not found")


@router.get("", response_model=list[CuyResponse])
async def list_cuyes_endpoint(
    shed: str | None = None,
    cage: str | None = None,
    today: date = Depends(get_today),
    uow=Depends(get_uow),
):
    return await list_cuyes.execute(uow, shed=shed, cage=cage, today=today)


@router.post("", response_model=CuyResponse, status_code=status.HTTP_201_CREATED)
async def create_cuy_endpoint(
    payload: CuyCreate,
    today: date = Depends(get_today),
    uow=Depends(get_uow),
):
    input_data = create_cuy.CreateCuyInput(**payload.model_dump())
    return await create_cuy.execute(uow, input_data, today=today)


@router.get("/stats", response_model=CuyStatsResponse)
async def cuy_stats_endpoint(today: date = Depends(get_today), uow=Depends(get_uow)):
    return await cuy_stats.execute(uow, today=today)


@router.post(
    "/cage-registration",
    response_model=list[CuyResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register_cage_endpoint(
    payload: CageRegistrationRequest,
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
    rng: random.Random | None = Depends(get_rng),
    uow=Depends(get_uow),
):
    input_data = create_from_groups.CageRegistrationInput(
        shed=payload.shed,
        cage=payload.cage,
        breed=payload.breed,
        groups=[create_from_groups.CuyGroup(**group.model_dump()) for group in payload.groups],
    )
    return await create_from_groups.execute(
        uow,
        input_data,
        rng=rng,
        today=today,
        default_age_variance=settings.bulk_default_age_variance_days,
        default_weight_variance=settings.bulk_default_weight_variance_grams,
    )


@router.get("/{cuy_id}", response_model=CuyResponse)
async def get_cuy_endpoint(cuy_id: int, today: date = Depends(get_today), uow=Depends(get_uow)):
    cuy = await get_cuy.execute(uow, cuy_id, today=today)
    if not cuy:
        raise _not_found()
    return cuy


@router.put("/{cuy_id}", response_model=CuyResponse)
async def update_cuy_endpoint(
    cuy_id: int,
    payload: CuyUpdate,
    today: date = Depends(get_today),
    uow=Depends(get_uow),
):
    input_data = update_cuy.UpdateCuyInput(**payload.model_dump(exclude_unset=True))
    cuy = await update_cuy.execute(uow, cuy_id, input_data, today=today)
    if not cuy:
        raise _not_found()
    return cuy


@router.delete("/{cuy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cuy_endpoint(cuy_id: int, uow=Depends(get_uow)):
    if not await delete_cuy.execute(uow, cuy_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{cuy_id}/purpose", response_model=CuyResponse)
async def change_purpose_endpoint(
    cuy_id: int,
    payload: PurposeChangeRequest,
    today: date = Depends(get_today),
    uow=Depends(get_uow),
):
    cuy = await change_purpose.execute(
        uow, cuy_id, payload.purpose, payload.life_stage, today=today
    )
    if not cuy:
        raise _not_found()
    return cuy
