from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from app.crud.base import CRUDBase, as_dict
from app.db.async_session import transaction, dialect_insert
from app.models.instrument_status import InstrumentStatus
from app.models.domain import Status
from app.schemas.instrument_status import InstrumentStatusCreate
import uuid

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDInstrumentStatus(CRUDBase[InstrumentStatus, InstrumentStatusCreate, InstrumentStatusCreate]):
    def _select(self):
        return (
            select(InstrumentStatus, Status.name.label("status"))
            .outerjoin(Status, Status.id == InstrumentStatus.status_id)
        )

    async def _expand(self, db: AsyncSession, query) -> List[Dict[str, Any]]:
        statuses = []
        for row in (await db.execute(query)).all():
            status = as_dict(row[0])
            status["status"] = row.status
            statuses.append(status)
        return statuses

    async def get_by_instrument(self, db: AsyncSession, *, instrument_id: uuid.UUID) -> List[Dict[str, Any]]:
        return await self._expand(
            db,
            self._select()
            .filter(InstrumentStatus.instrument_id == instrument_id)
            .order_by(InstrumentStatus.time.desc()),
        )

    async def get_by_id(self, db: AsyncSession, *, status_id: uuid.UUID) -> Optional[Dict[str, Any]]:
        statuses = await self._expand(db, self._select().filter(InstrumentStatus.id == status_id))
        return statuses[0] if statuses else None

    async def create_or_update(
        self, db: AsyncSession, *, instrument_id: uuid.UUID, objs_in: List[InstrumentStatusCreate]
    ) -> None:
        """
        Record statuses for an instrument. A status already recorded at the
        same time is overwritten.
        """
        if not objs_in:
            return
        stmt = dialect_insert(db, InstrumentStatus)
        stmt = stmt.on_conflict_do_update(
            index_elements=["instrument_id", "time"],
            set_={"status_id": stmt.excluded.status_id},
        )
        rows = [
            {
                "id": uuid.uuid4(),
                "instrument_id": instrument_id,
                "status_id": obj_in.status_id,
                "time": obj_in.time,
            }
            for obj_in in objs_in
        ]
        async with transaction(db):
            for row in rows:
                await db.execute(stmt, row)
        logger.info(f"Recorded {len(rows)} status(es) for instrument {instrument_id}")

    async def delete_status(self, db: AsyncSession, *, status_id: uuid.UUID) -> None:
        async with transaction(db):
            await db.execute(delete(InstrumentStatus).where(InstrumentStatus.id == status_id))


instrument_status = CRUDInstrumentStatus(InstrumentStatus)
