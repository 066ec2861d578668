from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, field_validator

from app.utils.util import to_utc


class InstrumentStatusCreate(BaseModel):
    status_id: UUID
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc(value)


class InstrumentStatus(BaseModel):
    id: UUID
    instrument_id: UUID
    status_id: UUID
    status: Optional[str] = None
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc(value)

    class Config:
        from_attributes = True
