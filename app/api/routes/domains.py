from typing import Any, List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.crud import domain
from app.schemas.domain import Domain

router = APIRouter()


@router.get("", response_model=List[Domain])
async def read_domains(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    """
    Every lookup value (instrument types, parameters, units, statuses, roles)
    """
    return await domain.get_all(db)
