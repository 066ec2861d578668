import uuid
from sqlalchemy import Column, String, Boolean, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import Base
from app.models.audit_info import AuditMixin


class Office(Base):
    __tablename__ = "office"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    symbol = Column(String, nullable=True)


class Project(AuditMixin, Base):
    __tablename__ = "project"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    federal_id = Column(String, nullable=True)
    office_id = Column(UUID(as_uuid=True), ForeignKey("office.id"), nullable=True)
    image = Column(String, nullable=True)
    deleted = Column(Boolean, nullable=False, default=False)
    slug = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)


class ProjectTimeseries(Base):
    """Timeseries promoted to the project level"""
    __tablename__ = "project_timeseries"
    __table_args__ = (
        PrimaryKeyConstraint("project_id", "timeseries_id", name="project_unique_timeseries"),
    )

    project_id = Column(UUID(as_uuid=True), ForeignKey("project.id"), nullable=False)
    timeseries_id = Column(UUID(as_uuid=True), ForeignKey("timeseries.id"), nullable=False)
