from typing import Optional, Dict
from uuid import UUID
from pydantic import BaseModel


class AwareParameter(BaseModel):
    id: UUID
    key: str
    parameter_id: UUID
    unit_id: UUID

    class Config:
        from_attributes = True


class AwarePlatformParameterConfig(BaseModel):
    """Maps each enabled AWARE parameter key of a platform to a timeseries"""
    instrument_id: Optional[UUID] = None
    aware_id: UUID
    aware_parameters: Dict[str, Optional[UUID]] = {}
