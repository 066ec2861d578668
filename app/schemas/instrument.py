from typing import Optional, Dict, Any
from uuid import UUID
from pydantic import BaseModel

from app.schemas.common import AuditInfo


class InstrumentBase(BaseModel):
    name: str
    type_id: UUID
    geometry: Optional[Dict[str, Any]] = None
    station: Optional[int] = None
    offset: Optional[int] = None


# Properties to receive on instrument creation; project comes from the URL
class InstrumentCreate(InstrumentBase):
    pass


class InstrumentUpdate(InstrumentBase):
    id: Optional[UUID] = None
    project_id: Optional[UUID] = None


class Instrument(InstrumentBase, AuditInfo):
    id: UUID
    slug: str
    type: Optional[str] = None
    project_id: Optional[UUID] = None

    class Config:
        from_attributes = True


class InstrumentCount(BaseModel):
    instrument_count: int
