from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.api.routes.instruments import get_instrument_or_404
from app.crud import instrument, instrument_group
from app.db.async_session import utc_now
from app.models.profile import Profile
from app.schemas.collection import collection_body
from app.schemas.instrument import Instrument as InstrumentSchema
from app.schemas.instrument_group import (
    InstrumentGroup as InstrumentGroupSchema,
    InstrumentGroupCreate,
    InstrumentGroupUpdate,
)
from app.utils.logger import get_logger
import uuid

# Initialize logger
logger = get_logger("api.instrument_groups")

router = APIRouter()


async def get_group_or_404(db: AsyncSession, group_id: uuid.UUID) -> dict:
    db_group = await instrument_group.get_by_id(db, group_id=group_id)
    if not db_group or db_group["deleted"]:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Instrument group not found"
        )
    return db_group


@router.get("", response_model=List[InstrumentGroupSchema])
async def read_instrument_groups(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    return await instrument_group.get_all(db)


@router.get("/{group_id}", response_model=InstrumentGroupSchema)
async def read_instrument_group(
    group_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await get_group_or_404(db, group_id)


@router.post(
    "",
    response_model=List[InstrumentGroupSchema],
    status_code=status.HTTP_201_CREATED,
)
async def create_instrument_groups(
    *,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
    groups_in: List[InstrumentGroupCreate] = Depends(collection_body(InstrumentGroupCreate)),
) -> Any:
    created = await instrument_group.create_bulk(
        db, objs_in=groups_in, creator=current_profile.id, create_date=utc_now()
    )
    logger.info(f"Profile {current_profile.id} created {len(created)} instrument group(s)")
    return created


@router.put("/{group_id}", response_model=InstrumentGroupSchema)
async def update_instrument_group(
    *,
    group_id: uuid.UUID,
    group_in: InstrumentGroupUpdate,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    if group_in.id is not None and group_in.id != group_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Instrument group id in body does not match id in URL"
        )
    await get_group_or_404(db, group_id)
    updated = await instrument_group.update_group(
        db, group_id=group_id, obj_in=group_in, updater=current_profile.id, update_date=utc_now()
    )
    logger.info(f"Profile {current_profile.id} updated instrument group {group_id}")
    return updated


@router.delete("/{group_id}")
async def delete_instrument_group(
    *,
    group_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await get_group_or_404(db, group_id)
    await instrument_group.soft_delete(db, group_id=group_id)
    logger.info(f"Profile {current_profile.id} deleted instrument group {group_id}")
    return {}


@router.get("/{group_id}/instruments", response_model=List[InstrumentSchema])
async def read_instrument_group_instruments(
    group_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    await get_group_or_404(db, group_id)
    instrument_ids = await instrument_group.get_instrument_ids(db, group_id=group_id)
    return await instrument.get_by_ids(db, ids=instrument_ids)


@router.post("/{group_id}/instruments/{instrument_id}")
async def add_instrument_to_group(
    *,
    group_id: uuid.UUID,
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    """
    Add an instrument to the group. Adding a member twice changes nothing.
    """
    await get_group_or_404(db, group_id)
    await get_instrument_or_404(db, instrument_id)
    await instrument_group.add_instrument(db, group_id=group_id, instrument_id=instrument_id)
    logger.info(f"Profile {current_profile.id} added instrument {instrument_id} to group {group_id}")
    return {}


@router.delete("/{group_id}/instruments/{instrument_id}")
async def remove_instrument_from_group(
    *,
    group_id: uuid.UUID,
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await instrument_group.remove_instrument(db, group_id=group_id, instrument_id=instrument_id)
    logger.info(f"Profile {current_profile.id} removed instrument {instrument_id} from group {group_id}")
    return {}
