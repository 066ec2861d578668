from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.api.routes.projects import get_project_or_404
from app.crud import instrument
from app.db.async_session import utc_now
from app.models.profile import Profile
from app.schemas.collection import collection_body
from app.schemas.common import IDAndSlug
from app.schemas.instrument import (
    Instrument as InstrumentSchema,
    InstrumentCreate,
    InstrumentUpdate,
    InstrumentCount,
)
from app.utils.logger import get_logger
import uuid

# Initialize logger
logger = get_logger("api.instruments")

router = APIRouter()


async def get_instrument_or_404(db: AsyncSession, instrument_id: uuid.UUID) -> dict:
    db_instrument = await instrument.get_by_id(db, instrument_id=instrument_id)
    if not db_instrument or db_instrument["deleted"]:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Instrument not found"
        )
    return db_instrument


@router.get("/instruments", response_model=List[InstrumentSchema])
async def read_instruments(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    return await instrument.get_all(db)


@router.get("/instruments/count", response_model=InstrumentCount)
async def count_instruments(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    return InstrumentCount(instrument_count=await instrument.count(db))


@router.get("/instruments/{instrument_id}", response_model=InstrumentSchema)
async def read_instrument(
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await get_instrument_or_404(db, instrument_id)


@router.post(
    "/projects/{project_id}/instruments",
    response_model=List[IDAndSlug],
    status_code=status.HTTP_201_CREATED,
)
async def create_instruments(
    *,
    project_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
    instruments_in: List[InstrumentCreate] = Depends(collection_body(InstrumentCreate)),
) -> Any:
    """
    Create one or more instruments in a project.
    Names must be unique within the project, ignoring case.
    """
    await get_project_or_404(db, project_id)
    conflicts = await instrument.find_name_conflicts(
        db, project_id=project_id, names=[obj_in.name for obj_in in instruments_in]
    )
    if conflicts:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Instrument name(s) already used in this project: {', '.join(conflicts)}"
        )
    created = await instrument.create_bulk(
        db,
        project_id=project_id,
        objs_in=instruments_in,
        creator=current_profile.id,
        create_date=utc_now(),
    )
    logger.info(f"Profile {current_profile.id} created {len(created)} instrument(s) in project {project_id}")
    return created


@router.put("/projects/{project_id}/instruments/{instrument_id}", response_model=InstrumentSchema)
async def update_instrument(
    *,
    project_id: uuid.UUID,
    instrument_id: uuid.UUID,
    instrument_in: InstrumentUpdate,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    if instrument_in.id is not None and instrument_in.id != instrument_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Instrument id in body does not match instrument id in URL"
        )
    db_instrument = await get_instrument_or_404(db, instrument_id)
    if db_instrument["project_id"] != project_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Instrument not found in project"
        )
    updated = await instrument.update_instrument(
        db,
        instrument_id=instrument_id,
        obj_in=instrument_in,
        updater=current_profile.id,
        update_date=utc_now(),
    )
    logger.info(f"Profile {current_profile.id} updated instrument {instrument_id}")
    return updated


@router.delete("/projects/{project_id}/instruments/{instrument_id}")
async def delete_instrument(
    *,
    project_id: uuid.UUID,
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    db_instrument = await get_instrument_or_404(db, instrument_id)
    if db_instrument["project_id"] != project_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Instrument not found in project"
        )
    await instrument.soft_delete(db, instrument_id=instrument_id)
    logger.info(f"Profile {current_profile.id} deleted instrument {instrument_id}")
    return {}
