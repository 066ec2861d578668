from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, literal, null, union_all
from app.models.domain import InstrumentType, Parameter, Unit, Status
from app.models.profile import Role


class CRUDDomain:
    """Read-only lookup values gathered from every domain table"""

    def _select(self):
        lookups = union_all(
            select(
                InstrumentType.id.label("id"),
                literal("instrument_type").label("group"),
                InstrumentType.name.label("value"),
                null().label("description"),
            ),
            select(
                Parameter.id.label("id"),
                literal("parameter").label("group"),
                Parameter.name.label("value"),
                null().label("description"),
            ),
            select(
                Unit.id.label("id"),
                literal("unit").label("group"),
                Unit.name.label("value"),
                Unit.abbreviation.label("description"),
            ),
            select(
                Status.id.label("id"),
                literal("status").label("group"),
                Status.name.label("value"),
                Status.description.label("description"),
            ),
            select(
                Role.id.label("id"),
                literal("role").label("group"),
                Role.name.label("value"),
                null().label("description"),
            ),
        ).subquery("domain")
        return select(lookups).order_by(lookups.c.group, lookups.c.value)

    async def get_all(self, db: AsyncSession) -> List[Dict[str, Any]]:
        result = await db.execute(self._select())
        return [dict(row) for row in result.mappings().all()]


domain = CRUDDomain()
