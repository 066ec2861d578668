from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from app.crud.base import CRUDBase, as_dict
from app.db.async_session import transaction, dialect_insert
from app.models.plot_configuration import PlotConfiguration, PlotConfigurationTimeseries
from app.schemas.plot_configuration import PlotConfigurationCreate, PlotConfigurationUpdate
from app.utils.util import next_unique_slug
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)

association = PlotConfigurationTimeseries.__table__


class CRUDPlotConfiguration(CRUDBase[PlotConfiguration, PlotConfigurationCreate, PlotConfigurationUpdate]):
    async def _expand(self, db: AsyncSession, configs: List[PlotConfiguration]) -> List[Dict[str, Any]]:
        """Attach the associated timeseries ids to each plot configuration"""
        if not configs:
            return []
        result = await db.execute(
            select(association.c.plot_configuration_id, association.c.timeseries_id)
            .where(association.c.plot_configuration_id.in_([c.id for c in configs]))
        )
        timeseries: Dict[uuid.UUID, List[uuid.UUID]] = {}
        for config_id, timeseries_id in result.all():
            timeseries.setdefault(config_id, []).append(timeseries_id)

        expanded = []
        for config in configs:
            item = as_dict(config)
            item["timeseries_id"] = timeseries.get(config.id, [])
            expanded.append(item)
        return expanded

    async def get_by_project(self, db: AsyncSession, *, project_id: uuid.UUID) -> List[Dict[str, Any]]:
        result = await db.execute(
            select(PlotConfiguration)
            .filter(PlotConfiguration.project_id == project_id)
            .order_by(PlotConfiguration.name)
        )
        return await self._expand(db, list(result.scalars().all()))

    async def get_by_id(
        self, db: AsyncSession, *, project_id: uuid.UUID, plot_configuration_id: uuid.UUID
    ) -> Optional[Dict[str, Any]]:
        result = await db.execute(
            select(PlotConfiguration)
            .filter(PlotConfiguration.project_id == project_id, PlotConfiguration.id == plot_configuration_id)
            .execution_options(populate_existing=True)
        )
        configs = await self._expand(db, list(result.scalars().all()))
        return configs[0] if configs else None

    async def create_plot_configuration(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        obj_in: PlotConfigurationCreate,
        creator: uuid.UUID,
        create_date: datetime,
    ) -> Optional[Dict[str, Any]]:
        """Create the plot configuration and its timeseries associations together"""
        slug = next_unique_slug(obj_in.name, await self.list_slugs(db))
        config_id = uuid.uuid4()
        async with transaction(db):
            await db.execute(
                PlotConfiguration.__table__.insert().values(
                    id=config_id,
                    slug=slug,
                    name=obj_in.name,
                    project_id=project_id,
                    creator=creator,
                    create_date=create_date,
                )
            )
            desired = list(dict.fromkeys(obj_in.timeseries_id))
            if desired:
                await db.execute(
                    association.insert(),
                    [{"plot_configuration_id": config_id, "timeseries_id": ts_id} for ts_id in desired],
                )
        logger.info(f"Created plot configuration {config_id} with {len(desired)} timeseries")
        return await self.get_by_id(db, project_id=project_id, plot_configuration_id=config_id)

    async def reconcile_timeseries(
        self, db: AsyncSession, *, plot_configuration_id: uuid.UUID, timeseries_ids: List[uuid.UUID]
    ) -> Tuple[int, int]:
        """
        Make the stored associations equal the desired timeseries ids.

        Must run inside the caller's transaction. Returns (deleted, inserted).
        """
        desired = list(dict.fromkeys(timeseries_ids))
        result = await db.execute(
            select(association.c.timeseries_id)
            .where(association.c.plot_configuration_id == plot_configuration_id)
        )
        existing = set(result.scalars().all())

        deleted = await db.execute(
            delete(association).where(
                association.c.plot_configuration_id == plot_configuration_id,
                association.c.timeseries_id.notin_(desired),
            )
        )

        missing = [ts_id for ts_id in desired if ts_id not in existing]
        if missing:
            stmt = dialect_insert(db, association).on_conflict_do_nothing(
                index_elements=[association.c.plot_configuration_id, association.c.timeseries_id]
            )
            await db.execute(
                stmt,
                [{"plot_configuration_id": plot_configuration_id, "timeseries_id": ts_id} for ts_id in missing],
            )
        return deleted.rowcount, len(missing)

    async def update_plot_configuration(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        plot_configuration_id: uuid.UUID,
        obj_in: PlotConfigurationUpdate,
        updater: uuid.UUID,
        update_date: datetime,
    ) -> Optional[Dict[str, Any]]:
        async with transaction(db):
            await db.execute(
                update(PlotConfiguration.__table__)
                .where(
                    PlotConfiguration.__table__.c.project_id == project_id,
                    PlotConfiguration.__table__.c.id == plot_configuration_id,
                )
                .values(name=obj_in.name, updater=updater, update_date=update_date)
            )
            deleted, inserted = await self.reconcile_timeseries(
                db, plot_configuration_id=plot_configuration_id, timeseries_ids=obj_in.timeseries_id
            )
        logger.info(
            f"Plot configuration {plot_configuration_id}: removed {deleted}, added {inserted} timeseries"
        )
        return await self.get_by_id(db, project_id=project_id, plot_configuration_id=plot_configuration_id)

    async def delete_plot_configuration(
        self, db: AsyncSession, *, project_id: uuid.UUID, plot_configuration_id: uuid.UUID
    ) -> None:
        async with transaction(db):
            await db.execute(
                delete(association).where(association.c.plot_configuration_id == plot_configuration_id)
            )
            await db.execute(
                delete(PlotConfiguration.__table__).where(
                    PlotConfiguration.__table__.c.project_id == project_id,
                    PlotConfiguration.__table__.c.id == plot_configuration_id,
                )
            )


plot_configuration = CRUDPlotConfiguration(PlotConfiguration)
