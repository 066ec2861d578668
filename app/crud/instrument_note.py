from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.crud.base import CRUDBase
from app.db.async_session import transaction
from app.models.instrument_note import InstrumentNote
from app.schemas.instrument_note import InstrumentNoteCreate, InstrumentNoteUpdate
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDInstrumentNote(CRUDBase[InstrumentNote, InstrumentNoteCreate, InstrumentNoteUpdate]):
    async def get_all(self, db: AsyncSession) -> List[InstrumentNote]:
        result = await db.execute(select(InstrumentNote).order_by(InstrumentNote.time.desc()))
        return list(result.scalars().all())

    async def get_by_instrument(self, db: AsyncSession, *, instrument_id: uuid.UUID) -> List[InstrumentNote]:
        result = await db.execute(
            select(InstrumentNote)
            .filter(InstrumentNote.instrument_id == instrument_id)
            .order_by(InstrumentNote.time.desc())
        )
        return list(result.scalars().all())

    async def create_bulk(
        self,
        db: AsyncSession,
        *,
        objs_in: List[InstrumentNoteCreate],
        creator: uuid.UUID,
        create_date: datetime,
    ) -> List[InstrumentNote]:
        notes = [
            InstrumentNote(
                id=uuid.uuid4(),
                instrument_id=obj_in.instrument_id,
                title=obj_in.title,
                body=obj_in.body,
                time=obj_in.time,
                creator=creator,
                create_date=create_date,
            )
            for obj_in in objs_in
        ]
        async with transaction(db):
            db.add_all(notes)
            await db.flush()
        logger.info(f"Created {len(notes)} instrument note(s)")
        return notes

    async def update_note(
        self,
        db: AsyncSession,
        *,
        db_obj: InstrumentNote,
        obj_in: InstrumentNoteUpdate,
        updater: uuid.UUID,
        update_date: datetime,
    ) -> InstrumentNote:
        return await self.update(
            db,
            db_obj=db_obj,
            obj_in={
                "title": obj_in.title,
                "body": obj_in.body,
                "time": obj_in.time,
                "updater": updater,
                "update_date": update_date,
            },
        )


instrument_note = CRUDInstrumentNote(InstrumentNote)
