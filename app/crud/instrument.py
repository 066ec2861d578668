from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func, false
from app.crud.base import CRUDBase, as_dict
from app.db.async_session import transaction
from app.models.instrument import Instrument
from app.models.domain import InstrumentType
from app.schemas.instrument import InstrumentCreate, InstrumentUpdate
from app.schemas.common import IDAndSlug
from app.utils.util import next_unique_slug
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDInstrument(CRUDBase[Instrument, InstrumentCreate, InstrumentUpdate]):
    def _select(self):
        return (
            select(Instrument, InstrumentType.name.label("type"))
            .outerjoin(InstrumentType, InstrumentType.id == Instrument.type_id)
        )

    async def _expand(self, db: AsyncSession, query) -> List[Dict[str, Any]]:
        instruments = []
        for row in (await db.execute(query)).all():
            instrument = as_dict(row[0])
            instrument["type"] = row.type
            instruments.append(instrument)
        return instruments

    async def get_all(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self._expand(
            db, self._select().filter(Instrument.deleted == false()).order_by(Instrument.name)
        )

    async def get_by_project(self, db: AsyncSession, *, project_id: uuid.UUID) -> List[Dict[str, Any]]:
        return await self._expand(
            db,
            self._select()
            .filter(Instrument.project_id == project_id, Instrument.deleted == false())
            .order_by(Instrument.name),
        )

    async def get_by_ids(self, db: AsyncSession, *, ids: List[uuid.UUID]) -> List[Dict[str, Any]]:
        if not ids:
            return []
        return await self._expand(
            db,
            self._select()
            .filter(Instrument.id.in_(ids), Instrument.deleted == false())
            .order_by(Instrument.name),
        )

    async def get_by_id(self, db: AsyncSession, *, instrument_id: uuid.UUID) -> Optional[Dict[str, Any]]:
        instruments = await self._expand(db, self._select().filter(Instrument.id == instrument_id).execution_options(populate_existing=True))
        return instruments[0] if instruments else None

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count(Instrument.id)).filter(Instrument.deleted == false()))
        return result.scalar() or 0

    async def find_name_conflicts(
        self, db: AsyncSession, *, project_id: uuid.UUID, names: List[str]
    ) -> List[str]:
        """
        Names that would not be unique within the project, compared case-insensitively
        against existing instruments and against each other.
        """
        result = await db.execute(
            select(Instrument.name).filter(Instrument.project_id == project_id, Instrument.deleted == false())
        )
        taken = {name.upper() for name in result.scalars().all()}
        conflicts = []
        for name in names:
            key = name.upper()
            if key in taken:
                conflicts.append(name)
            taken.add(key)
        return conflicts

    async def create_bulk(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        objs_in: List[InstrumentCreate],
        creator: uuid.UUID,
        create_date: datetime,
    ) -> List[IDAndSlug]:
        used = set(await self.list_slugs(db))
        created = []
        async with transaction(db):
            for obj_in in objs_in:
                slug = next_unique_slug(obj_in.name, used)
                used.add(slug)
                db_obj = Instrument(
                    id=uuid.uuid4(),
                    slug=slug,
                    name=obj_in.name,
                    type_id=obj_in.type_id,
                    project_id=project_id,
                    geometry=obj_in.geometry,
                    station=obj_in.station,
                    offset=obj_in.offset,
                    creator=creator,
                    create_date=create_date,
                )
                db.add(db_obj)
                created.append(IDAndSlug(id=db_obj.id, slug=slug))
            await db.flush()
        logger.info(f"Created {len(created)} instrument(s) in project {project_id}")
        return created

    async def update_instrument(
        self,
        db: AsyncSession,
        *,
        instrument_id: uuid.UUID,
        obj_in: InstrumentUpdate,
        updater: uuid.UUID,
        update_date: datetime,
    ) -> Optional[Dict[str, Any]]:
        values = dict(
            name=obj_in.name,
            type_id=obj_in.type_id,
            geometry=obj_in.geometry,
            station=obj_in.station,
            offset=obj_in.offset,
            updater=updater,
            update_date=update_date,
        )
        if obj_in.project_id is not None:
            values["project_id"] = obj_in.project_id
        async with transaction(db):
            await db.execute(update(Instrument).where(Instrument.id == instrument_id).values(**values))
        return await self.get_by_id(db, instrument_id=instrument_id)

    async def soft_delete(self, db: AsyncSession, *, instrument_id: uuid.UUID) -> None:
        async with transaction(db):
            await db.execute(update(Instrument).where(Instrument.id == instrument_id).values(deleted=True))


instrument = CRUDInstrument(Instrument)
