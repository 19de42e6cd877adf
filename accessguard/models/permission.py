from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from accessguard.db.base import Base, TimestampMixin, UUIDMixin


class Permission(UUIDMixin, TimestampMixin, Base):
    """
    A grantable capability.

    Matching is done on (action, resource); ``name`` is a display label only.
    """

    __tablename__ = "permissions"

    name = Column(String(100), unique=True, nullable=False, index=True)
    action = Column(String(50), nullable=False)  # create, read, update, delete, execute
    resource = Column(String(100), nullable=False)  # users, roles, reports...
    description = Column(Text, nullable=True)
    resource_id = Column(
        Uuid(as_uuid=True), ForeignKey("resources.id", ondelete="SET NULL"), nullable=True
    )

    resource_detail = relationship("Resource", back_populates="permissions")
    roles = relationship("Role", secondary="role_permissions", back_populates="permissions")

    @property
    def key(self) -> str:
        return f"{self.action}:{self.resource}"

    def __repr__(self) -> str:
        return f"<Permission {self.key}>"
