from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, false
from app.crud.base import CRUDBase, as_dict
from app.db.async_session import transaction, dialect_insert
from app.models.project import Project, ProjectTimeseries
from app.models.profile import ProfileProjectRole
from app.models.instrument import Instrument
from app.models.instrument_group import InstrumentGroup
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.schemas.common import IDAndSlug
from app.utils.util import next_unique_slug
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDProject(CRUDBase[Project, ProjectCreate, ProjectUpdate]):
    def _select(self):
        instrument_count = (
            select(func.count(Instrument.id))
            .where(Instrument.project_id == Project.id, Instrument.deleted == false())
            .correlate(Project)
            .scalar_subquery()
        )
        instrument_group_count = (
            select(func.count(InstrumentGroup.id))
            .where(InstrumentGroup.project_id == Project.id, InstrumentGroup.deleted == false())
            .correlate(Project)
            .scalar_subquery()
        )
        return select(
            Project,
            instrument_count.label("instrument_count"),
            instrument_group_count.label("instrument_group_count"),
        )

    async def _expand(self, db: AsyncSession, query) -> List[Dict[str, Any]]:
        """Run a project query and attach counts and promoted timeseries"""
        rows = (await db.execute(query)).all()
        if not rows:
            return []

        project_ids = [row[0].id for row in rows]
        ts_rows = await db.execute(
            select(ProjectTimeseries.project_id, ProjectTimeseries.timeseries_id)
            .filter(ProjectTimeseries.project_id.in_(project_ids))
        )
        timeseries: Dict[uuid.UUID, List[uuid.UUID]] = {}
        for project_id, timeseries_id in ts_rows:
            timeseries.setdefault(project_id, []).append(timeseries_id)

        projects = []
        for row in rows:
            project = as_dict(row[0])
            project["instrument_count"] = row.instrument_count or 0
            project["instrument_group_count"] = row.instrument_group_count or 0
            project["timeseries"] = timeseries.get(project["id"], [])
            projects.append(project)
        return projects

    async def get_all(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self._expand(
            db, self._select().filter(Project.deleted == false()).order_by(Project.name)
        )

    async def list_for_profile(self, db: AsyncSession, *, profile_id: uuid.UUID) -> List[Dict[str, Any]]:
        """Projects where the profile holds at least one role"""
        member_of = select(ProfileProjectRole.project_id).filter(ProfileProjectRole.profile_id == profile_id)
        return await self._expand(
            db,
            self._select()
            .filter(Project.id.in_(member_of), Project.deleted == false())
            .order_by(Project.name),
        )

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count(Project.id)).filter(Project.deleted == false()))
        return result.scalar() or 0

    async def get_by_id(self, db: AsyncSession, *, project_id: uuid.UUID) -> Optional[Dict[str, Any]]:
        projects = await self._expand(db, self._select().filter(Project.id == project_id).execution_options(populate_existing=True))
        return projects[0] if projects else None

    async def create_bulk(
        self,
        db: AsyncSession,
        *,
        objs_in: List[ProjectCreate],
        creator: uuid.UUID,
        create_date: datetime,
    ) -> List[IDAndSlug]:
        """Create all projects in one transaction, each with a unique slug"""
        used = set(await self.list_slugs(db))
        created = []
        async with transaction(db):
            for obj_in in objs_in:
                slug = next_unique_slug(obj_in.name, used)
                used.add(slug)
                db_obj = Project(
                    id=uuid.uuid4(),
                    slug=slug,
                    name=obj_in.name,
                    federal_id=obj_in.federal_id,
                    office_id=obj_in.office_id,
                    image=obj_in.image,
                    creator=creator,
                    create_date=create_date,
                )
                db.add(db_obj)
                created.append(IDAndSlug(id=db_obj.id, slug=slug))
            await db.flush()
        logger.info(f"Created {len(created)} project(s)")
        return created

    async def update_project(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        obj_in: ProjectUpdate,
        updater: uuid.UUID,
        update_date: datetime,
    ) -> Optional[Dict[str, Any]]:
        async with transaction(db):
            await db.execute(
                update(Project)
                .where(Project.id == project_id)
                .values(
                    name=obj_in.name,
                    federal_id=obj_in.federal_id,
                    office_id=obj_in.office_id,
                    image=obj_in.image,
                    updater=updater,
                    update_date=update_date,
                )
            )
        return await self.get_by_id(db, project_id=project_id)

    async def soft_delete(self, db: AsyncSession, *, project_id: uuid.UUID) -> None:
        async with transaction(db):
            await db.execute(update(Project).where(Project.id == project_id).values(deleted=True))

    async def list_instrument_names(self, db: AsyncSession, *, project_id: uuid.UUID) -> List[str]:
        result = await db.execute(
            select(Instrument.name)
            .filter(Instrument.project_id == project_id, Instrument.deleted == false())
            .order_by(Instrument.name)
        )
        return list(result.scalars().all())

    async def add_timeseries(
        self, db: AsyncSession, *, project_id: uuid.UUID, timeseries_id: uuid.UUID
    ) -> None:
        """Promote a timeseries to the project level. Promoting twice is a no-op."""
        stmt = (
            dialect_insert(db, ProjectTimeseries)
            .values(project_id=project_id, timeseries_id=timeseries_id)
            .on_conflict_do_nothing(index_elements=["project_id", "timeseries_id"])
        )
        async with transaction(db):
            await db.execute(stmt)

    async def remove_timeseries(
        self, db: AsyncSession, *, project_id: uuid.UUID, timeseries_id: uuid.UUID
    ) -> None:
        """Remove a promotion; the timeseries itself is kept"""
        async with transaction(db):
            await db.execute(
                delete(ProjectTimeseries).where(
                    ProjectTimeseries.project_id == project_id,
                    ProjectTimeseries.timeseries_id == timeseries_id,
                )
            )


project = CRUDProject(Project)
