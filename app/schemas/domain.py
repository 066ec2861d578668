from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class Domain(BaseModel):
    """One lookup value from any of the domain tables"""
    id: UUID
    group: str
    value: str
    description: Optional[str] = None

    class Config:
        from_attributes = True
