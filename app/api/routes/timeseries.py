from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.crud import timeseries
from app.models.profile import Profile
from app.models.timeseries import Timeseries
from app.schemas.collection import collection_body
from app.schemas.timeseries import (
    Timeseries as TimeseriesSchema,
    TimeseriesCreate,
    TimeseriesUpdate,
)
from app.utils.logger import get_logger
import uuid

# Initialize logger
logger = get_logger("api.timeseries")

router = APIRouter()


async def get_timeseries_or_404(db: AsyncSession, timeseries_id: uuid.UUID) -> Timeseries:
    db_timeseries = await timeseries.get(db, timeseries_id)
    if not db_timeseries:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timeseries not found"
        )
    return db_timeseries


@router.get("/timeseries", response_model=List[TimeseriesSchema])
async def read_all_timeseries(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    return await timeseries.get_all(db)


@router.get("/timeseries/{timeseries_id}", response_model=TimeseriesSchema)
async def read_timeseries(
    timeseries_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await get_timeseries_or_404(db, timeseries_id)


@router.get("/instruments/{instrument_id}/timeseries", response_model=List[TimeseriesSchema])
async def read_instrument_timeseries(
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await timeseries.get_by_instrument(db, instrument_id=instrument_id)


@router.post(
    "/timeseries",
    response_model=List[TimeseriesSchema],
    status_code=status.HTTP_201_CREATED,
)
async def create_timeseries(
    *,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
    timeseries_in: List[TimeseriesCreate] = Depends(collection_body(TimeseriesCreate)),
) -> Any:
    created = await timeseries.create_bulk(db, objs_in=timeseries_in)
    logger.info(f"Profile {current_profile.id} created {len(created)} timeseries")
    return created


@router.put("/timeseries/{timeseries_id}", response_model=TimeseriesSchema)
async def update_timeseries(
    *,
    timeseries_id: uuid.UUID,
    timeseries_in: TimeseriesUpdate,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    if timeseries_in.id is not None and timeseries_in.id != timeseries_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Timeseries id in body does not match timeseries id in URL"
        )
    db_timeseries = await get_timeseries_or_404(db, timeseries_id)
    updated = await timeseries.update_timeseries(db, db_obj=db_timeseries, obj_in=timeseries_in)
    logger.info(f"Profile {current_profile.id} updated timeseries {timeseries_id}")
    return updated


@router.delete("/timeseries/{timeseries_id}")
async def delete_timeseries(
    *,
    timeseries_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    """
    Delete a timeseries with all of its measurements
    """
    await get_timeseries_or_404(db, timeseries_id)
    await timeseries.delete_timeseries(db, timeseries_id=timeseries_id)
    logger.info(f"Profile {current_profile.id} deleted timeseries {timeseries_id}")
    return {}
