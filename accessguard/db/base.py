import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Declarative base shared by every model
Base = declarative_base()


class UUIDMixin:
    """Adds an automatically generated UUID primary key."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """Adds created_at and updated_at columns maintained by the database."""

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
