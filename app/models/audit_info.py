from sqlalchemy import Column, DateTime
from sqlalchemy.dialects.postgresql import UUID

from app.db.async_session import utc_now


class AuditMixin:
    """Creator/updater profile ids and timestamps shared by mutable entities"""
    creator = Column(UUID(as_uuid=True), nullable=False)
    create_date = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updater = Column(UUID(as_uuid=True), nullable=True)
    update_date = Column(DateTime(timezone=True), nullable=True)
