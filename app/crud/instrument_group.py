from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, false
from app.crud.base import CRUDBase, as_dict
from app.db.async_session import transaction, dialect_insert
from app.models.instrument_group import InstrumentGroup, InstrumentGroupInstruments
from app.models.instrument import Instrument
from app.models.timeseries import Timeseries
from app.schemas.instrument_group import InstrumentGroupCreate, InstrumentGroupUpdate
from app.utils.util import next_unique_slug
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDInstrumentGroup(CRUDBase[InstrumentGroup, InstrumentGroupCreate, InstrumentGroupUpdate]):
    def _select(self):
        members = (
            select(InstrumentGroupInstruments.instrument_id)
            .join(Instrument, Instrument.id == InstrumentGroupInstruments.instrument_id)
            .where(
                InstrumentGroupInstruments.instrument_group_id == InstrumentGroup.id,
                Instrument.deleted == false(),
            )
            .correlate(InstrumentGroup)
        )
        instrument_count = (
            select(func.count(InstrumentGroupInstruments.instrument_id))
            .join(Instrument, Instrument.id == InstrumentGroupInstruments.instrument_id)
            .where(
                InstrumentGroupInstruments.instrument_group_id == InstrumentGroup.id,
                Instrument.deleted == false(),
            )
            .correlate(InstrumentGroup)
            .scalar_subquery()
        )
        timeseries_count = (
            select(func.count(Timeseries.id))
            .where(Timeseries.instrument_id.in_(members))
            .correlate(InstrumentGroup)
            .scalar_subquery()
        )
        return select(
            InstrumentGroup,
            instrument_count.label("instrument_count"),
            timeseries_count.label("timeseries_count"),
        )

    async def _expand(self, db: AsyncSession, query) -> List[Dict[str, Any]]:
        groups = []
        for row in (await db.execute(query)).all():
            group = as_dict(row[0])
            group["instrument_count"] = row.instrument_count or 0
            group["timeseries_count"] = row.timeseries_count or 0
            groups.append(group)
        return groups

    async def get_all(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self._expand(
            db, self._select().filter(InstrumentGroup.deleted == false()).order_by(InstrumentGroup.name)
        )

    async def get_by_project(self, db: AsyncSession, *, project_id: uuid.UUID) -> List[Dict[str, Any]]:
        return await self._expand(
            db,
            self._select()
            .filter(InstrumentGroup.project_id == project_id, InstrumentGroup.deleted == false())
            .order_by(InstrumentGroup.name),
        )

    async def get_by_id(self, db: AsyncSession, *, group_id: uuid.UUID) -> Optional[Dict[str, Any]]:
        groups = await self._expand(db, self._select().filter(InstrumentGroup.id == group_id).execution_options(populate_existing=True))
        return groups[0] if groups else None

    async def create_bulk(
        self,
        db: AsyncSession,
        *,
        objs_in: List[InstrumentGroupCreate],
        creator: uuid.UUID,
        create_date: datetime,
    ) -> List[Dict[str, Any]]:
        used = set(await self.list_slugs(db))
        created = []
        async with transaction(db):
            for obj_in in objs_in:
                slug = next_unique_slug(obj_in.name, used)
                used.add(slug)
                db_obj = InstrumentGroup(
                    id=uuid.uuid4(),
                    slug=slug,
                    name=obj_in.name,
                    description=obj_in.description,
                    project_id=obj_in.project_id,
                    creator=creator,
                    create_date=create_date,
                )
                db.add(db_obj)
                created.append(db_obj)
            await db.flush()
        logger.info(f"Created {len(created)} instrument group(s)")
        return [as_dict(db_obj) for db_obj in created]

    async def update_group(
        self,
        db: AsyncSession,
        *,
        group_id: uuid.UUID,
        obj_in: InstrumentGroupUpdate,
        updater: uuid.UUID,
        update_date: datetime,
    ) -> Optional[Dict[str, Any]]:
        async with transaction(db):
            await db.execute(
                update(InstrumentGroup)
                .where(InstrumentGroup.id == group_id)
                .values(
                    name=obj_in.name,
                    description=obj_in.description,
                    project_id=obj_in.project_id,
                    updater=updater,
                    update_date=update_date,
                )
            )
        return await self.get_by_id(db, group_id=group_id)

    async def soft_delete(self, db: AsyncSession, *, group_id: uuid.UUID) -> None:
        async with transaction(db):
            await db.execute(update(InstrumentGroup).where(InstrumentGroup.id == group_id).values(deleted=True))

    async def get_instrument_ids(self, db: AsyncSession, *, group_id: uuid.UUID) -> List[uuid.UUID]:
        result = await db.execute(
            select(InstrumentGroupInstruments.instrument_id)
            .filter(InstrumentGroupInstruments.instrument_group_id == group_id)
        )
        return list(result.scalars().all())

    async def add_instrument(
        self, db: AsyncSession, *, group_id: uuid.UUID, instrument_id: uuid.UUID
    ) -> None:
        stmt = (
            dialect_insert(db, InstrumentGroupInstruments)
            .values(instrument_group_id=group_id, instrument_id=instrument_id)
            .on_conflict_do_nothing(index_elements=["instrument_group_id", "instrument_id"])
        )
        async with transaction(db):
            await db.execute(stmt)

    async def remove_instrument(
        self, db: AsyncSession, *, group_id: uuid.UUID, instrument_id: uuid.UUID
    ) -> None:
        async with transaction(db):
            await db.execute(
                delete(InstrumentGroupInstruments).where(
                    InstrumentGroupInstruments.instrument_group_id == group_id,
                    InstrumentGroupInstruments.instrument_id == instrument_id,
                )
            )


instrument_group = CRUDInstrumentGroup(InstrumentGroup)
