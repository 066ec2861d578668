from typing import Any, List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.crud import project
from app.models.profile import Profile
from app.schemas.profile import Profile as ProfileSchema
from app.schemas.project import Project as ProjectSchema

router = APIRouter()


@router.get("/my_profile", response_model=ProfileSchema)
async def read_my_profile(current_profile: Profile = Depends(deps.get_current_profile)) -> Any:
    return current_profile


@router.get("/my_projects", response_model=List[ProjectSchema])
async def read_my_projects(
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    """
    Projects where the current profile holds any role
    """
    return await project.list_for_profile(db, profile_id=current_profile.id)
