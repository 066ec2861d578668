from typing import Dict, List
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from app.db.async_session import transaction, dialect_insert
from app.models.timeseries import Timeseries, TimeseriesMeasurement
from app.schemas.timeseries import Measurement, MeasurementCollection
from app.utils.util import to_utc
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDTimeseriesMeasurement:
    """
    Reads and writes measurement points. Points are keyed by
    (timeseries_id, time); writing a point at an existing key replaces its value.
    """

    async def list_in_window(
        self,
        db: AsyncSession,
        *,
        timeseries_id: uuid.UUID,
        after: datetime,
        before: datetime,
    ) -> MeasurementCollection:
        """
        Points of one timeseries strictly inside (after, before), newest first.
        An unknown timeseries or an empty window gives an empty collection.
        """
        result = await db.execute(
            select(TimeseriesMeasurement.time, TimeseriesMeasurement.value)
            .join(Timeseries, Timeseries.id == TimeseriesMeasurement.timeseries_id)
            .filter(
                Timeseries.id == timeseries_id,
                TimeseriesMeasurement.time > to_utc(after),
                TimeseriesMeasurement.time < to_utc(before),
            )
            .order_by(TimeseriesMeasurement.time.desc())
        )
        return MeasurementCollection(
            timeseries_id=timeseries_id,
            items=[Measurement(time=row.time, value=row.value) for row in result.all()],
        )

    async def create_or_update(
        self, db: AsyncSession, *, collections: List[MeasurementCollection]
    ) -> List[MeasurementCollection]:
        """
        Upsert every point of every collection in one transaction.

        Returns the input collections as confirmation. A failure on any point
        rolls back the whole batch and propagates to the caller.
        """
        rows = [
            {
                "id": uuid.uuid4(),
                "timeseries_id": collection.timeseries_id,
                "time": item.time,
                "value": item.value,
            }
            for collection in collections
            for item in collection.items
        ]
        if not rows:
            return collections

        table = TimeseriesMeasurement.__table__
        stmt = dialect_insert(db, table)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.timeseries_id, table.c.time],
            set_={"value": stmt.excluded.value},
        )
        try:
            async with transaction(db):
                # Row by row: a later duplicate key in the batch overwrites an earlier one
                for row in rows:
                    await db.execute(stmt, row)
        except Exception as e:
            logger.error(f"Measurement upsert of {len(rows)} point(s) failed: {str(e)}")
            raise
        logger.info(f"Upserted {len(rows)} point(s) across {len(collections)} timeseries")
        return collections

    async def delete_at(self, db: AsyncSession, *, timeseries_id: uuid.UUID, time: datetime) -> None:
        async with transaction(db):
            await db.execute(
                delete(TimeseriesMeasurement.__table__).where(
                    TimeseriesMeasurement.__table__.c.timeseries_id == timeseries_id,
                    TimeseriesMeasurement.__table__.c.time == to_utc(time),
                )
            )

    async def computed(
        self,
        db: AsyncSession,
        *,
        instrument_ids: List[uuid.UUID],
        after: datetime,
        before: datetime,
        interval: timedelta,
    ) -> List[MeasurementCollection]:
        """
        Mean value per interval bucket for every timeseries of the instruments.

        Buckets are aligned to ``after``; each point is stamped with the start
        of its bucket. Collections are returned per timeseries in ascending time.
        """
        if not instrument_ids:
            return []
        after, before = to_utc(after), to_utc(before)
        result = await db.execute(
            select(
                TimeseriesMeasurement.timeseries_id,
                TimeseriesMeasurement.time,
                TimeseriesMeasurement.value,
            )
            .join(Timeseries, Timeseries.id == TimeseriesMeasurement.timeseries_id)
            .filter(
                Timeseries.instrument_id.in_(instrument_ids),
                TimeseriesMeasurement.time > after,
                TimeseriesMeasurement.time < before,
            )
            .order_by(TimeseriesMeasurement.timeseries_id, TimeseriesMeasurement.time)
        )

        # timeseries_id -> bucket index -> values
        buckets: Dict[uuid.UUID, Dict[int, List[float]]] = {}
        for timeseries_id, time, value in result.all():
            index = int((to_utc(time) - after) // interval)
            buckets.setdefault(timeseries_id, {}).setdefault(index, []).append(value)

        return [
            MeasurementCollection(
                timeseries_id=timeseries_id,
                items=[
                    Measurement(time=after + index * interval, value=sum(values) / len(values))
                    for index, values in sorted(by_index.items())
                ],
            )
            for timeseries_id, by_index in buckets.items()
        ]


timeseries_measurement = CRUDTimeseriesMeasurement()
