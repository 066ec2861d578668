from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.api.routes.instruments import get_instrument_or_404
from app.crud import instrument_status
from app.models.profile import Profile
from app.schemas.collection import collection_body
from app.schemas.instrument_status import (
    InstrumentStatus as InstrumentStatusSchema,
    InstrumentStatusCreate,
)
from app.utils.logger import get_logger
import uuid

# Initialize logger
logger = get_logger("api.instrument_status")

router = APIRouter()


async def get_status_or_404(db: AsyncSession, instrument_id: uuid.UUID, status_id: uuid.UUID) -> dict:
    db_status = await instrument_status.get_by_id(db, status_id=status_id)
    if not db_status or db_status["instrument_id"] != instrument_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Instrument status not found"
        )
    return db_status


@router.get("/{instrument_id}/status", response_model=List[InstrumentStatusSchema])
async def read_instrument_status(
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    """
    Status history of an instrument, newest first
    """
    return await instrument_status.get_by_instrument(db, instrument_id=instrument_id)


@router.get("/{instrument_id}/status/{status_id}", response_model=InstrumentStatusSchema)
async def read_one_instrument_status(
    instrument_id: uuid.UUID,
    status_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await get_status_or_404(db, instrument_id, status_id)


@router.post("/{instrument_id}/status", status_code=status.HTTP_201_CREATED)
async def create_or_update_instrument_status(
    *,
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
    statuses_in: List[InstrumentStatusCreate] = Depends(collection_body(InstrumentStatusCreate)),
) -> Any:
    """
    Record one or more statuses. A status at an already recorded time replaces it.
    """
    await get_instrument_or_404(db, instrument_id)
    await instrument_status.create_or_update(db, instrument_id=instrument_id, objs_in=statuses_in)
    logger.info(
        f"Profile {current_profile.id} recorded {len(statuses_in)} status(es) for instrument {instrument_id}"
    )
    return {}


@router.delete("/{instrument_id}/status/{status_id}")
async def delete_instrument_status(
    *,
    instrument_id: uuid.UUID,
    status_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await get_status_or_404(db, instrument_id, status_id)
    await instrument_status.delete_status(db, status_id=status_id)
    logger.info(f"Profile {current_profile.id} deleted status {status_id} of instrument {instrument_id}")
    return {}
