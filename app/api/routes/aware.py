from typing import Any, List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.crud import aware
from app.schemas.aware import AwareParameter, AwarePlatformParameterConfig

router = APIRouter()


@router.get("/parameters", response_model=List[AwareParameter])
async def read_aware_parameters(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    return await aware.get_parameters(db)


@router.get("/data_acquisition_config", response_model=List[AwarePlatformParameterConfig])
async def read_aware_data_acquisition_config(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    """
    Which timeseries each enabled AWARE parameter is written to
    """
    return await aware.get_data_acquisition_config(db)
