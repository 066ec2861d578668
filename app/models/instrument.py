import uuid
from sqlalchemy import Column, String, Boolean, Integer, ForeignKey
from sqlalchemy.dialects.postgresql import UUID, JSONB

from app.db.async_session import Base
from app.models.audit_info import AuditMixin


class Instrument(AuditMixin, Base):
    __tablename__ = "instrument"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    deleted = Column(Boolean, nullable=False, default=False)
    slug = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    type_id = Column(UUID(as_uuid=True), ForeignKey("instrument_type.id"), nullable=False)
    project_id = Column(UUID(as_uuid=True), ForeignKey("project.id"), nullable=True)

    # GeoJSON geometry, e.g. {"type": "Point", "coordinates": [-80.8, 26.7]}
    geometry = Column(JSONB, nullable=True)
    station = Column(Integer, nullable=True)
    offset = Column(Integer, nullable=True)
