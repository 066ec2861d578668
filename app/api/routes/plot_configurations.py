from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import deps
from app.api.routes.projects import get_project_or_404
from app.crud import plot_configuration
from app.db.async_session import utc_now
from app.models.profile import Profile
from app.schemas.plot_configuration import (
    PlotConfiguration as PlotConfigurationSchema,
    PlotConfigurationCreate,
    PlotConfigurationUpdate,
)
from app.utils.logger import get_logger
import uuid

# Initialize logger
logger = get_logger("api.plot_configurations")

router = APIRouter()


async def get_plot_configuration_or_404(
    db: AsyncSession, project_id: uuid.UUID, plot_configuration_id: uuid.UUID
) -> dict:
    db_config = await plot_configuration.get_by_id(
        db, project_id=project_id, plot_configuration_id=plot_configuration_id
    )
    if not db_config:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Plot configuration not found"
        )
    return db_config


@router.get("/{project_id}/plot_configurations", response_model=List[PlotConfigurationSchema])
async def read_plot_configurations(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await plot_configuration.get_by_project(db, project_id=project_id)


@router.get(
    "/{project_id}/plot_configurations/{plot_configuration_id}",
    response_model=PlotConfigurationSchema,
)
async def read_plot_configuration(
    project_id: uuid.UUID,
    plot_configuration_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
) -> Any:
    return await get_plot_configuration_or_404(db, project_id, plot_configuration_id)


@router.post(
    "/{project_id}/plot_configurations",
    response_model=PlotConfigurationSchema,
    status_code=status.HTTP_201_CREATED,
)
async def create_plot_configuration(
    *,
    project_id: uuid.UUID,
    config_in: PlotConfigurationCreate,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await get_project_or_404(db, project_id)
    created = await plot_configuration.create_plot_configuration(
        db,
        project_id=project_id,
        obj_in=config_in,
        creator=current_profile.id,
        create_date=utc_now(),
    )
    logger.info(f"Profile {current_profile.id} created plot configuration {created['id']}")
    return created


@router.put(
    "/{project_id}/plot_configurations/{plot_configuration_id}",
    response_model=PlotConfigurationSchema,
)
async def update_plot_configuration(
    *,
    project_id: uuid.UUID,
    plot_configuration_id: uuid.UUID,
    config_in: PlotConfigurationUpdate,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    """
    Rename a plot configuration and replace its set of timeseries
    """
    if config_in.id is not None and config_in.id != plot_configuration_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Plot configuration id in body does not match id in URL"
        )
    await get_plot_configuration_or_404(db, project_id, plot_configuration_id)
    updated = await plot_configuration.update_plot_configuration(
        db,
        project_id=project_id,
        plot_configuration_id=plot_configuration_id,
        obj_in=config_in,
        updater=current_profile.id,
        update_date=utc_now(),
    )
    logger.info(f"Profile {current_profile.id} updated plot configuration {plot_configuration_id}")
    return updated


@router.delete("/{project_id}/plot_configurations/{plot_configuration_id}")
async def delete_plot_configuration(
    *,
    project_id: uuid.UUID,
    plot_configuration_id: uuid.UUID,
    db: AsyncSession = Depends(deps.get_async_db),
    current_profile: Profile = Depends(deps.get_current_profile),
) -> Any:
    await get_plot_configuration_or_404(db, project_id, plot_configuration_id)
    await plot_configuration.delete_plot_configuration(
        db, project_id=project_id, plot_configuration_id=plot_configuration_id
    )
    logger.info(f"Profile {current_profile.id} deleted plot configuration {plot_configuration_id}")
    return {}
