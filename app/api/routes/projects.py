from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.crud import project, instrument, instrument_group
from app.db.async_session import utc_now
from app.models.profile import Profile
from app.schemas.collection import collection_body
from app.schemas.common import IDAndSlug
from app.schemas.instrument import Instrument as InstrumentSchema
from app.schemas.instrument_group import InstrumentGroup as InstrumentGroupSchema
from app.schemas.project import (
    Project as ProjectSchema,
    ProjectCreate,
    ProjectUpdate,
    ProjectCount,
)
from app.utils.logger import get_logger
import uuid

# Initialize logger
logger = get_logger("api.projects")

router = APIRouter()


async def get_project_or_404(db: AsyncSession, project_id: uuid.UUID) -> dict:
    db_project = await project.get_by_id(db, project_id=project_id)
    if not db_project or db_project["deleted"]:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return db_project


@router.get("/projects", response_model=List[ProjectSchema])
async def read_projects(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    """
    Retrieve all projects
    """
    return await project.get_all(db)


@router.get("/projects/count", response_model=ProjectCount)
async def count_projects(db: AsyncSession = Depends(deps.get_async_db)) -> Any:
    return ProjectCount(project_count=await project.count(db))


@router.get("/projects/{project_id}", response_model=ProjectSchema)
async def read_project(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await get_project_or_404(db, project_id)


@router.post(
    "/projects",
    response_model=List[IDAndSlug],
    status_code=status.HTTP_201_CREATED,
)
async def create_projects(
    *,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_admin_profile),
    projects_in: List[ProjectCreate] = Depends(collection_body(ProjectCreate)),
) -> Any:
    """
    Create one or more projects (admin only)
    """
    created = await project.create_bulk(
        db, objs_in=projects_in, creator=current_profile.id, create_date=utc_now()
    )
    logger.info(f"Profile {current_profile.id} created {len(created)} project(s)")
    return created


@router.put("/projects/{project_id}", response_model=ProjectSchema)
async def update_project(
    *,
    project_id: uuid.UUID,
    project_in: ProjectUpdate,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    if project_in.id is not None and project_in.id != project_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project id in body does not match project id in URL"
        )
    await get_project_or_404(db, project_id)
    updated = await project.update_project(
        db,
        project_id=project_id,
        obj_in=project_in,
        updater=current_profile.id,
        update_date=utc_now(),
    )
    logger.info(f"Profile {current_profile.id} updated project {project_id}")
    return updated


@router.delete("/projects/{project_id}")
async def delete_project(
    *,
    project_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_admin_profile),
) -> Any:
    """
    Soft delete a project (admin only)
    """
    await get_project_or_404(db, project_id)
    await project.soft_delete(db, project_id=project_id)
    logger.info(f"Profile {current_profile.id} deleted project {project_id}")
    return {}


@router.get("/projects/{project_id}/instruments", response_model=List[InstrumentSchema])
async def read_project_instruments(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await instrument.get_by_project(db, project_id=project_id)


@router.get("/projects/{project_id}/instruments/names", response_model=List[str])
async def read_project_instrument_names(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await project.list_instrument_names(db, project_id=project_id)


@router.get("/projects/{project_id}/instrument_groups", response_model=List[InstrumentGroupSchema])
async def read_project_instrument_groups(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await instrument_group.get_by_project(db, project_id=project_id)


@router.post("/projects/{project_id}/timeseries/{timeseries_id}")
async def add_project_timeseries(
    *,
    project_id: uuid.UUID,
    timeseries_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    """
    Promote a timeseries to the project. Promoting it again changes nothing.
    """
    await get_project_or_404(db, project_id)
    await project.add_timeseries(db, project_id=project_id, timeseries_id=timeseries_id)
    logger.info(f"Profile {current_profile.id} added timeseries {timeseries_id} to project {project_id}")
    return {}


@router.delete("/projects/{project_id}/timeseries/{timeseries_id}")
async def remove_project_timeseries(
    *,
    project_id: uuid.UUID,
    timeseries_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await project.remove_timeseries(db, project_id=project_id, timeseries_id=timeseries_id)
    logger.info(f"Profile {current_profile.id} removed timeseries {timeseries_id} from project {project_id}")
    return {}
