from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from app.schemas.common import AuditInfo


class InstrumentGroupCreate(BaseModel):
    name: str
    description: Optional[str] = None
    project_id: Optional[UUID] = None


class InstrumentGroupUpdate(BaseModel):
    id: Optional[UUID] = None
    name: str
    description: Optional[str] = None
    project_id: Optional[UUID] = None


class InstrumentGroup(AuditInfo):
    id: UUID
    slug: str
    name: str
    description: Optional[str] = None
    project_id: Optional[UUID] = None
    instrument_count: int = 0
    timeseries_count: int = 0

    class Config:
        from_attributes = True
