from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel

from app.schemas.common import AuditInfo


class PlotConfigurationCreate(BaseModel):
    name: str
    timeseries_id: List[UUID] = []


class PlotConfigurationUpdate(PlotConfigurationCreate):
    id: Optional[UUID] = None


class PlotConfiguration(AuditInfo):
    id: UUID
    slug: str
    name: str
    project_id: UUID
    timeseries_id: List[UUID] = []

    class Config:
        from_attributes = True
