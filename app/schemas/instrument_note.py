from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, field_validator

from app.schemas.common import AuditInfo
from app.utils.util import to_utc


class InstrumentNoteCreate(BaseModel):
    instrument_id: UUID
    title: str
    body: str = ""
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc(value)


class InstrumentNoteUpdate(BaseModel):
    id: Optional[UUID] = None
    title: str
    body: str = ""
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc(value)


class InstrumentNote(AuditInfo):
    id: UUID
    instrument_id: UUID
    title: str
    body: str
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_utc(value)

    class Config:
        from_attributes = True
