import uuid
from sqlalchemy import Column, String, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import Base
from app.models.audit_info import AuditMixin


class PlotConfiguration(AuditMixin, Base):
    __tablename__ = "plot_configuration"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    project_id = Column(UUID(as_uuid=True), ForeignKey("project.id"), nullable=False)


class PlotConfigurationTimeseries(Base):
    __tablename__ = "plot_configuration_timeseries"
    __table_args__ = (
        PrimaryKeyConstraint(
            "plot_configuration_id", "timeseries_id", name="plot_configuration_unique_timeseries"
        ),
    )

    plot_configuration_id = Column(
        UUID(as_uuid=True), ForeignKey("plot_configuration.id", ondelete="CASCADE"), nullable=False
    )
    timeseries_id = Column(UUID(as_uuid=True), ForeignKey("timeseries.id"), nullable=False)
