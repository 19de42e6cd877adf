from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text, Uuid
from sqlalchemy.orm import relationship

from accessguard.db.base import Base, TimestampMixin, UUIDMixin

# Many-to-many: roles <-> permissions
role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", Uuid(as_uuid=True), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Uuid(as_uuid=True), ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class Role(UUIDMixin, TimestampMixin, Base):
    """Named bundle of permissions held by users."""

    __tablename__ = "roles"

    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    # Hierarchy level (higher = more privileges); informational only
    level = Column(Integer, nullable=False, default=0)

    permissions = relationship(
        "Permission", secondary=role_permissions, back_populates="roles"
    )
    users = relationship("User", secondary="user_roles", back_populates="roles")

    def __repr__(self) -> str:
        return f"<Role {self.name}>"
