import uuid
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import Base


class Timeseries(Base):
    __tablename__ = "timeseries"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    instrument_id = Column(UUID(as_uuid=True), ForeignKey("instrument.id"), nullable=True)
    parameter_id = Column(UUID(as_uuid=True), ForeignKey("parameter.id"), nullable=False)
    unit_id = Column(UUID(as_uuid=True), ForeignKey("unit.id"), nullable=False)


class TimeseriesMeasurement(Base):
    __tablename__ = "timeseries_measurement"
    __table_args__ = (
        UniqueConstraint("timeseries_id", "time", name="timeseries_unique_time"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    timeseries_id = Column(UUID(as_uuid=True), ForeignKey("timeseries.id", ondelete="CASCADE"), nullable=False)
    time = Column(DateTime(timezone=True), nullable=False)
    value = Column(Float, nullable=False)
