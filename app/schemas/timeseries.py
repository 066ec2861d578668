from typing import Optional, List
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, field_validator

from app.utils.util import to_utc


class TimeseriesCreate(BaseModel):
    name: str
    instrument_id: Optional[UUID] = None
    parameter_id: UUID
    unit_id: UUID


class TimeseriesUpdate(TimeseriesCreate):
    id: Optional[UUID] = None


class Timeseries(BaseModel):
    id: UUID
    slug: str
    name: str
    instrument_id: Optional[UUID] = None
    parameter_id: UUID
    unit_id: UUID

    class Config:
        from_attributes = True


class Measurement(BaseModel):
    """A single (time, value) point"""
    time: datetime
    value: float

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc(value)

    class Config:
        from_attributes = True


class MeasurementCollection(BaseModel):
    """Points that all belong to one timeseries"""
    timeseries_id: UUID
    items: List[Measurement] = []
