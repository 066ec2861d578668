from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel

from app.schemas.common import AuditInfo


# Properties to receive on project creation
class ProjectCreate(BaseModel):
    name: str
    federal_id: Optional[str] = None
    office_id: Optional[UUID] = None
    image: Optional[str] = None


# Properties to receive on project update
class ProjectUpdate(BaseModel):
    id: Optional[UUID] = None
    name: str
    federal_id: Optional[str] = None
    office_id: Optional[UUID] = None
    image: Optional[str] = None


# Properties to return to client
class Project(AuditInfo):
    id: UUID
    federal_id: Optional[str] = None
    office_id: Optional[UUID] = None
    image: Optional[str] = None
    slug: str
    name: str
    timeseries: List[UUID] = []
    instrument_count: int = 0
    instrument_group_count: int = 0

    class Config:
        from_attributes = True


class ProjectCount(BaseModel):
    project_count: int
