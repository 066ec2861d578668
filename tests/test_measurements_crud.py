"""
Tests for the measurement upsert writer, the window reader and interval means
"""
import uuid
from datetime import timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import timeseries_measurement
from app.models import Timeseries, TimeseriesMeasurement
from app.schemas.timeseries import Measurement, MeasurementCollection
from tests.conftest import utc


async def stored_points(db: AsyncSession, timeseries_id: uuid.UUID) -> dict:
    result = await db.execute(
        select(TimeseriesMeasurement.time, TimeseriesMeasurement.value)
        .filter(TimeseriesMeasurement.timeseries_id == timeseries_id)
        .order_by(TimeseriesMeasurement.time)
    )
    return {row.time.replace(tzinfo=None): row.value for row in result.all()}


async def test_upsert_overwrites_and_inserts(db: AsyncSession, timeseries: Timeseries):
    """Existing {10:00: 1.0, 11:00: 2.0} + [{11:00: 3.0}, {12:00: 4.0}] -> three points"""
    collection = MeasurementCollection(
        timeseries_id=timeseries.id,
        items=[
            Measurement(time=utc(2024, 1, 1, 11), value=3.0),
            Measurement(time=utc(2024, 1, 1, 12), value=4.0),
        ],
    )
    returned = await timeseries_measurement.create_or_update(db, collections=[collection])

    assert returned == [collection]
    points = await stored_points(db, timeseries.id)
    assert points == {
        utc(2024, 1, 1, 10).replace(tzinfo=None): 1.0,
        utc(2024, 1, 1, 11).replace(tzinfo=None): 3.0,
        utc(2024, 1, 1, 12).replace(tzinfo=None): 4.0,
    }


async def test_upsert_twice_keeps_one_row_with_second_value(db: AsyncSession, timeseries: Timeseries):
    point_time = utc(2024, 2, 1, 0)
    for value in (5.0, 6.0):
        await timeseries_measurement.create_or_update(
            db,
            collections=[MeasurementCollection(
                timeseries_id=timeseries.id,
                items=[Measurement(time=point_time, value=value)],
            )],
        )

    result = await db.execute(
        select(func.count(TimeseriesMeasurement.id), func.max(TimeseriesMeasurement.value))
        .filter(
            TimeseriesMeasurement.timeseries_id == timeseries.id,
            TimeseriesMeasurement.time == point_time,
        )
    )
    count, value = result.one()
    assert count == 1
    assert value == 6.0


async def test_later_duplicate_in_batch_wins(db: AsyncSession, timeseries: Timeseries):
    point_time = utc(2024, 3, 1, 0)
    await timeseries_measurement.create_or_update(
        db,
        collections=[MeasurementCollection(
            timeseries_id=timeseries.id,
            items=[
                Measurement(time=point_time, value=1.0),
                Measurement(time=point_time, value=9.0),
            ],
        )],
    )
    points = await stored_points(db, timeseries.id)
    assert points[point_time.replace(tzinfo=None)] == 9.0


async def test_empty_batch_is_noop(db: AsyncSession, timeseries: Timeseries):
    assert await timeseries_measurement.create_or_update(db, collections=[]) == []
    empty = MeasurementCollection(timeseries_id=timeseries.id, items=[])
    assert await timeseries_measurement.create_or_update(db, collections=[empty]) == [empty]
    assert len(await stored_points(db, timeseries.id)) == 2


async def test_failed_point_rolls_back_whole_batch(db: AsyncSession, timeseries: Timeseries):
    """A point for an unknown timeseries aborts the batch; nothing is committed"""
    # The rollback expires loaded objects, so keep plain ids
    timeseries_id = timeseries.id
    collections = [
        MeasurementCollection(
            timeseries_id=timeseries.id,
            items=[Measurement(time=utc(2024, 1, 1, 11), value=99.0)],
        ),
        MeasurementCollection(
            timeseries_id=uuid.uuid4(),
            items=[Measurement(time=utc(2024, 1, 1, 11), value=1.0)],
        ),
    ]
    with pytest.raises(IntegrityError):
        await timeseries_measurement.create_or_update(db, collections=collections)

    points = await stored_points(db, timeseries_id)
    assert points[utc(2024, 1, 1, 11).replace(tzinfo=None)] == 2.0


async def test_window_is_strict_and_descending(db: AsyncSession, timeseries: Timeseries):
    await timeseries_measurement.create_or_update(
        db,
        collections=[MeasurementCollection(
            timeseries_id=timeseries.id,
            items=[Measurement(time=utc(2024, 1, 1, 12), value=4.0)],
        )],
    )

    # Bounds fall exactly on the 10:00 and 12:00 points
    collection = await timeseries_measurement.list_in_window(
        db, timeseries_id=timeseries.id, after=utc(2024, 1, 1, 10), before=utc(2024, 1, 1, 12)
    )
    assert collection.timeseries_id == timeseries.id
    assert [(item.time, item.value) for item in collection.items] == [(utc(2024, 1, 1, 11), 2.0)]

    collection = await timeseries_measurement.list_in_window(
        db, timeseries_id=timeseries.id, after=utc(2024, 1, 1), before=utc(2024, 1, 2)
    )
    assert [item.time for item in collection.items] == [
        utc(2024, 1, 1, 12),
        utc(2024, 1, 1, 11),
        utc(2024, 1, 1, 10),
    ]


async def test_window_for_unknown_timeseries_is_empty(db: AsyncSession):
    timeseries_id = uuid.uuid4()
    collection = await timeseries_measurement.list_in_window(
        db, timeseries_id=timeseries_id, after=utc(2024, 1, 1), before=utc(2024, 1, 2)
    )
    assert collection.timeseries_id == timeseries_id
    assert collection.items == []


async def test_delete_at_removes_one_point(db: AsyncSession, timeseries: Timeseries):
    await timeseries_measurement.delete_at(db, timeseries_id=timeseries.id, time=utc(2024, 1, 1, 10))
    points = await stored_points(db, timeseries.id)
    assert list(points.values()) == [2.0]


async def test_computed_interval_means(db: AsyncSession, timeseries: Timeseries):
    await timeseries_measurement.create_or_update(
        db,
        collections=[MeasurementCollection(
            timeseries_id=timeseries.id,
            items=[
                Measurement(time=utc(2024, 1, 1, 10, 30), value=3.0),
                Measurement(time=utc(2024, 1, 1, 12, 15), value=10.0),
            ],
        )],
    )

    collections = await timeseries_measurement.computed(
        db,
        instrument_ids=[timeseries.instrument_id],
        after=utc(2024, 1, 1, 9, 59),
        before=utc(2024, 1, 1, 13),
        interval=timedelta(hours=1),
    )

    assert len(collections) == 1
    assert collections[0].timeseries_id == timeseries.id
    assert [(item.time, item.value) for item in collections[0].items] == [
        (utc(2024, 1, 1, 9, 59), 2.0),   # 10:00 and 10:30
        (utc(2024, 1, 1, 10, 59), 2.0),  # 11:00
        (utc(2024, 1, 1, 11, 59), 10.0),  # 12:15
    ]


async def test_computed_without_instruments(db: AsyncSession):
    assert await timeseries_measurement.computed(
        db, instrument_ids=[], after=utc(2024, 1, 1), before=utc(2024, 1, 2), interval=timedelta(hours=1)
    ) == []
