from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status

from src.application.use_cases.feeding import (
    consumption_statistics,
    create_consumption,
    delete_consumption,
    get_consumption,
    list_consumptions,
    update_consumption,
)
from src.domain.models.consumption import ConsumptionRecord
from src.interfaces.http.deps import get_uow
from src.interfaces.http.schemas.consumptions import (
    ConsumptionCreate,
    ConsumptionDeleteResponse,
    ConsumptionResponse,
    ConsumptionStatisticsResponse,
    ConsumptionUpdate,
)

router = APIRouter(prefix="/feeding/consumptions", tags=["feeding"])


def _to_response(record: ConsumptionRecord) -> ConsumptionResponse:
    # cost is a property; FastAPI's dataclass serialization would drop it
    return ConsumptionResponse.model_validate(record)


@router.post("", response_model=ConsumptionResponse, status_code=status.HTTP_201_CREATED)
async def create_consumption_endpoint(payload: ConsumptionCreate, uow=Depends(get_uow)):
    record = await create_consumption.execute(
        uow,
        create_consumption.CreateConsumptionInput(
            shed=payload.shed,
            feed_item_id=payload.feed_item_id,
            quantity=payload.quantity,
            date=payload.date,
        ),
    )
    return _to_response(record)


@router.get("", response_model=list[ConsumptionResponse])
async def list_consumptions_endpoint(
    date_from: date | None = None,
    date_to: date | None = None,
    uow=Depends(get_uow),
):
    records = await list_consumptions.execute(uow, date_from=date_from, date_to=date_to)
    return [_to_response(record) for record in records]


@router.get("/statistics", response_model=ConsumptionStatisticsResponse)
async def consumption_statistics_endpoint(
    date_from: date | None = None,
    date_to: date | None = None,
    uow=Depends(get_uow),
):
    return await consumption_statistics.execute(uow, date_from=date_from, date_to=date_to)


@router.get("/shed/{shed}", response_model=list[ConsumptionResponse])
async def list_shed_consumptions_endpoint(
    shed: str,
    date_from: date | None = None,
    date_to: date | None = None,
    uow=Depends(get_uow),
):
    records = await list_consumptions.by_shed(uow, shed, date_from=date_from, date_to=date_to)
    return [_to_response(record) for record in records]


@router.get("/{consumption_id}", response_model=ConsumptionResponse)
async def get_consumption_endpoint(consumption_id: int, uow=Depends(get_uow)):
    record = await get_consumption.execute(uow, consumption_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Consumption not found")
    return _to_response(record)


@router.put("/{consumption_id}", response_model=ConsumptionResponse)
async def update_consumption_endpoint(
    consumption_id: int,
    payload: ConsumptionUpdate,
    uow=Depends(get_uow),
):
    record = await update_consumption.execute(
        uow,
        consumption_id,
        update_consumption.UpdateConsumptionInput(**payload.model_dump(exclude_unset=True)),
    )
    return _to_response(record)


@router.delete("/{consumption_id}", response_model=ConsumptionDeleteResponse)
async def delete_consumption_endpoint(consumption_id: int, uow=Depends(get_uow)):
    deleted = await delete_consumption.execute(uow, consumption_id)
    return {"deleted": deleted}
