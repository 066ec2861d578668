import uuid
from sqlalchemy import Column, String, Boolean, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import Base
from app.models.audit_info import AuditMixin


class InstrumentGroup(AuditMixin, Base):
    __tablename__ = "instrument_group"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    deleted = Column(Boolean, nullable=False, default=False)
    slug = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    project_id = Column(UUID(as_uuid=True), ForeignKey("project.id"), nullable=True)


class InstrumentGroupInstruments(Base):
    __tablename__ = "instrument_group_instruments"
    __table_args__ = (
        PrimaryKeyConstraint("instrument_group_id", "instrument_id", name="instrument_group_unique_instrument"),
    )

    instrument_group_id = Column(UUID(as_uuid=True), ForeignKey("instrument_group.id"), nullable=False)
    instrument_id = Column(UUID(as_uuid=True), ForeignKey("instrument.id"), nullable=False)
