import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import Base
from app.models.audit_info import AuditMixin


class InstrumentNote(AuditMixin, Base):
    __tablename__ = "instrument_note"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    instrument_id = Column(UUID(as_uuid=True), ForeignKey("instrument.id"), nullable=False)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False, default="")
    time = Column(DateTime(timezone=True), nullable=False)
