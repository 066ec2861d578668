from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.crud import instrument_note
from app.db.async_session import utc_now
from app.models.instrument_note import InstrumentNote
from app.models.profile import Profile
from app.schemas.collection import collection_body
from app.schemas.instrument_note import (
    InstrumentNote as InstrumentNoteSchema,
    InstrumentNoteCreate,
    InstrumentNoteUpdate,
)
from app.utils.logger import get_logger
import uuid

# Initialize logger
logger = get_logger("api.instrument_notes")

router = APIRouter()


async def get_note_or_404(db: AsyncSession, note_id: uuid.UUID) -> InstrumentNote:
    db_note = await instrument_note.get(db, note_id)
    if not db_note:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Instrument note not found"
        )
    return db_note


@router.get("/instruments/notes", response_model=List[InstrumentNoteSchema])
async def read_instrument_notes(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    return await instrument_note.get_all(db)


@router.get("/instruments/notes/{note_id}", response_model=InstrumentNoteSchema)
async def read_instrument_note(
    note_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await get_note_or_404(db, note_id)


@router.get("/instruments/{instrument_id}/notes", response_model=List[InstrumentNoteSchema])
async def read_notes_for_instrument(
    instrument_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await instrument_note.get_by_instrument(db, instrument_id=instrument_id)


@router.post(
    "/instruments/notes",
    response_model=List[InstrumentNoteSchema],
    status_code=status.HTTP_201_CREATED,
)
async def create_instrument_notes(
    *,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
    notes_in: List[InstrumentNoteCreate] = Depends(collection_body(InstrumentNoteCreate)),
) -> Any:
    created = await instrument_note.create_bulk(
        db, objs_in=notes_in, creator=current_profile.id, create_date=utc_now()
    )
    logger.info(f"Profile {current_profile.id} created {len(created)} instrument note(s)")
    return created


@router.put("/instruments/notes/{note_id}", response_model=InstrumentNoteSchema)
async def update_instrument_note(
    *,
    note_id: uuid.UUID,
    note_in: InstrumentNoteUpdate,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    if note_in.id is not None and note_in.id != note_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Note id in body does not match note id in URL"
        )
    db_note = await get_note_or_404(db, note_id)
    updated = await instrument_note.update_note(
        db, db_obj=db_note, obj_in=note_in, updater=current_profile.id, update_date=utc_now()
    )
    logger.info(f"Profile {current_profile.id} updated instrument note {note_id}")
    return updated


@router.delete("/instruments/notes/{note_id}")
async def delete_instrument_note(
    *,
    note_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await get_note_or_404(db, note_id)
    await instrument_note.remove(db, id=note_id)
    logger.info(f"Profile {current_profile.id} deleted instrument note {note_id}")
    return {}
