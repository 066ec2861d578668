from typing import Any, List, Optional, Tuple
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.api.routes.instruments import get_instrument_or_404
from app.core.config import settings
from app.crud import timeseries_measurement
from app.db.async_session import utc_now
from app.models.profile import Profile
from app.schemas.collection import collection_body
from app.schemas.timeseries import MeasurementCollection
from app.utils.logger import get_logger
from app.utils.util import to_utc
import uuid

# Initialize logger
logger = get_logger("api.timeseries_measurements")

router = APIRouter()

# Widest computed bucket: one leap year
MAX_INTERVAL_SECONDS = 366 * 24 * 3600


def measurement_window(
    after: Optional[datetime] = Query(None, description="Exclusive lower bound, defaults to `before` minus the default window"),
    before: Optional[datetime] = Query(None, description="Exclusive upper bound, defaults to now"),
) -> Tuple[datetime, datetime]:
    """Resolve the (after, before) query window, filling in defaults"""
    before = to_utc(before) if before else utc_now()
    after = to_utc(after) if after else before - timedelta(days=settings.DEFAULT_MEASUREMENT_WINDOW_DAYS)
    if after >= before:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="'after' must be earlier than 'before'"
        )
    return after, before


@router.get("/timeseries/{timeseries_id}/measurements", response_model=MeasurementCollection)
async def read_timeseries_measurements(
    timeseries_id: uuid.UUID,
    window: Tuple[datetime, datetime] = Depends(measurement_window),
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    """
    Measurements strictly between `after` and `before`, newest first
    """
    after, before = window
    return await timeseries_measurement.list_in_window(
        db, timeseries_id=timeseries_id, after=after, before=before
    )


@router.post(
    "/timeseries_measurements",
    response_model=List[MeasurementCollection],
    status_code=status.HTTP_201_CREATED,
)
async def create_or_update_measurements(
    *,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
    collections_in: List[MeasurementCollection] = Depends(collection_body(MeasurementCollection)),
) -> Any:
    """
    Upsert measurements. A point at an existing time replaces the stored value.
    """
    stored = await timeseries_measurement.create_or_update(db, collections=collections_in)
    logger.info(f"Profile {current_profile.id} wrote measurements for {len(stored)} timeseries")
    return stored


@router.post(
    "/internal/timeseries_measurements",
    response_model=List[MeasurementCollection],
    status_code=status.HTTP_201_CREATED,
)
async def create_or_update_measurements_internal(
    *,
    db: AsyncSession = Depends(deps.get_async_db),
    api_key_valid: bool = Depends(deps.verify_api_key),
    collections_in: List[MeasurementCollection] = Depends(collection_body(MeasurementCollection)),
) -> Any:
    """
    Upsert measurements pushed by automated data loggers
    """
    stored = await timeseries_measurement.create_or_update(db, collections=collections_in)
    logger.info(f"Data logger wrote measurements for {len(stored)} timeseries")
    return stored


@router.delete("/timeseries/{timeseries_id}/measurements")
async def delete_timeseries_measurement(
    *,
    timeseries_id: uuid.UUID,
    time: datetime,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await timeseries_measurement.delete_at(db, timeseries_id=timeseries_id, time=time)
    logger.info(f"Profile {current_profile.id} deleted measurement {timeseries_id}@{to_utc(time).isoformat()}")
    return {}


@router.get(
    "/instruments/{instrument_id}/computed_timeseries",
    response_model=List[MeasurementCollection],
)
async def read_computed_timeseries(
    instrument_id: uuid.UUID,
    window: Tuple[datetime, datetime] = Depends(measurement_window),
    interval: int = Query(3600, gt=0, le=MAX_INTERVAL_SECONDS, description="Bucket width in seconds"),
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    """
    Interval means of every timeseries of an instrument
    """
    await get_instrument_or_404(db, instrument_id)
    after, before = window
    return await timeseries_measurement.computed(
        db,
        instrument_ids=[instrument_id],
        after=after,
        before=before,
        interval=timedelta(seconds=interval),
    )
