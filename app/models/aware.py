import uuid
from sqlalchemy import Column, String, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import Base


class AwareParameter(Base):
    """Parameter key reported by AWARE telemetry gauges"""
    __tablename__ = "aware_parameter"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    key = Column(String, unique=True, nullable=False)
    parameter_id = Column(UUID(as_uuid=True), ForeignKey("parameter.id"), nullable=False)
    unit_id = Column(UUID(as_uuid=True), ForeignKey("unit.id"), nullable=False)


class AwarePlatform(Base):
    __tablename__ = "aware_platform"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    aware_id = Column(UUID(as_uuid=True), unique=True, nullable=False)
    instrument_id = Column(UUID(as_uuid=True), ForeignKey("instrument.id"), nullable=True)


class AwarePlatformParameterEnabled(Base):
    __tablename__ = "aware_platform_parameter_enabled"
    __table_args__ = (
        PrimaryKeyConstraint(
            "aware_platform_id", "aware_parameter_id", name="aware_platform_unique_parameter"
        ),
    )

    aware_platform_id = Column(UUID(as_uuid=True), ForeignKey("aware_platform.id"), nullable=False)
    aware_parameter_id = Column(UUID(as_uuid=True), ForeignKey("aware_parameter.id"), nullable=False)
