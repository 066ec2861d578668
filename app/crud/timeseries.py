from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from app.crud.base import CRUDBase
from app.db.async_session import transaction
from app.models.timeseries import Timeseries, TimeseriesMeasurement
from app.models.project import ProjectTimeseries
from app.models.plot_configuration import PlotConfigurationTimeseries
from app.schemas.timeseries import TimeseriesCreate, TimeseriesUpdate
from app.utils.util import next_unique_slug
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDTimeseries(CRUDBase[Timeseries, TimeseriesCreate, TimeseriesUpdate]):
    async def get_all(self, db: AsyncSession) -> List[Timeseries]:
        result = await db.execute(select(Timeseries).order_by(Timeseries.name))
        return list(result.scalars().all())

    async def get_by_instrument(self, db: AsyncSession, *, instrument_id: uuid.UUID) -> List[Timeseries]:
        result = await db.execute(
            select(Timeseries).filter(Timeseries.instrument_id == instrument_id).order_by(Timeseries.name)
        )
        return list(result.scalars().all())

    async def create_bulk(self, db: AsyncSession, *, objs_in: List[TimeseriesCreate]) -> List[Timeseries]:
        used = set(await self.list_slugs(db))
        created = []
        async with transaction(db):
            for obj_in in objs_in:
                slug = next_unique_slug(obj_in.name, used)
                used.add(slug)
                db_obj = Timeseries(
                    id=uuid.uuid4(),
                    slug=slug,
                    name=obj_in.name,
                    instrument_id=obj_in.instrument_id,
                    parameter_id=obj_in.parameter_id,
                    unit_id=obj_in.unit_id,
                )
                db.add(db_obj)
                created.append(db_obj)
            await db.flush()
        logger.info(f"Created {len(created)} timeseries")
        return created

    async def update_timeseries(
        self, db: AsyncSession, *, db_obj: Timeseries, obj_in: TimeseriesUpdate
    ) -> Timeseries:
        return await self.update(
            db,
            db_obj=db_obj,
            obj_in={
                "name": obj_in.name,
                "instrument_id": obj_in.instrument_id,
                "parameter_id": obj_in.parameter_id,
                "unit_id": obj_in.unit_id,
            },
        )

    async def delete_timeseries(self, db: AsyncSession, *, timeseries_id: uuid.UUID) -> None:
        """Delete a timeseries together with its measurements and associations"""
        async with transaction(db):
            await db.execute(
                delete(TimeseriesMeasurement).where(TimeseriesMeasurement.timeseries_id == timeseries_id)
            )
            await db.execute(
                delete(PlotConfigurationTimeseries).where(PlotConfigurationTimeseries.timeseries_id == timeseries_id)
            )
            await db.execute(delete(ProjectTimeseries).where(ProjectTimeseries.timeseries_id == timeseries_id))
            await db.execute(delete(Timeseries).where(Timeseries.id == timeseries_id))


timeseries = CRUDTimeseries(Timeseries)
