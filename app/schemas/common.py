from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, field_validator

from app.utils.util import to_utc


class AuditInfo(BaseModel):
    """Audit fields returned with every mutable entity"""
    creator: UUID
    create_date: datetime
    updater: Optional[UUID] = None
    update_date: Optional[datetime] = None

    # SQLite hands back naive timestamps; everything stored is UTC
    @field_validator("create_date", "update_date")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_utc(value)


class IDAndSlug(BaseModel):
    id: UUID
    slug: str

    class Config:
        from_attributes = True
