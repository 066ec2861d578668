import uuid
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import Base


class InstrumentStatus(Base):
    __tablename__ = "instrument_status"
    __table_args__ = (
        UniqueConstraint("instrument_id", "time", name="instrument_unique_status_in_time"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    instrument_id = Column(UUID(as_uuid=True), ForeignKey("instrument.id"), nullable=False)
    status_id = Column(UUID(as_uuid=True), ForeignKey("status.id"), nullable=False)
    time = Column(DateTime(timezone=True), nullable=False)
