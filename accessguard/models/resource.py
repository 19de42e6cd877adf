from sqlalchemy import Boolean, Column, String, Text
from sqlalchemy.orm import relationship

from accessguard.db.base import Base, TimestampMixin, UUIDMixin


class Resource(UUIDMixin, TimestampMixin, Base):
    """Descriptive metadata about a protected target, consumed by the UI."""

    __tablename__ = "resources"

    name = Column(String(100), unique=True, nullable=False)
    type = Column(String(50), nullable=False)  # endpoint, page, file, database...
    path = Column(String(500), nullable=True)  # URL path or file path
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    permissions = relationship("Permission", back_populates="resource_detail")

    def __repr__(self) -> str:
        return f"<Resource {self.name}>"
