from typing import Iterable, List
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from accessguard.core.exceptions import Conflict, NotFound
from accessguard.models import Permission, Role
from accessguard.schemas.role import RoleCreate, RoleUpdate


class RoleService:
    """Role administration backing the /roles endpoints."""

    def __init__(self, db: Session):
        self.db = db

    def _permissions(self, permission_ids: Iterable[UUID]) -> List[Permission]:
        wanted = set(permission_ids)
        if not wanted:
            return []
        permissions = self.db.query(Permission).filter(Permission.id.in_(wanted)).all()
        if len(permissions) != len(wanted):
            raise NotFound("Permission not found")
        return permissions

    def _ensure_unique_name(self, name: str) -> None:
        if self.db.query(Role).filter(Role.name == name).first():
            raise Conflict(f"Role '{name}' already exists")

    def list_roles(self) -> List[Role]:
        return (
            self.db.query(Role)
            .options(selectinload(Role.permissions))
            .order_by(Role.level.desc(), Role.name)
            .all()
        )

    def get_role(self, role_id: UUID) -> Role:
        role = (
            self.db.query(Role)
            .options(selectinload(Role.permissions), selectinload(Role.users))
            .filter(Role.id == role_id)
            .first()
        )
        if not role:
            raise NotFound("Role not found")
        return role

    def create_role(self, data: RoleCreate) -> Role:
        self._ensure_unique_name(data.name)
        role = Role(name=data.name, description=data.description, level=data.level)
        role.permissions = self._permissions(data.permission_ids)
        self.db.add(role)
        self.db.commit()
        self.db.refresh(role)
        return role

    def update_role(self, role_id: UUID, data: RoleUpdate) -> Role:
        role = self.get_role(role_id)
        permissions = (
            self._permissions(data.permission_ids) if data.permission_ids is not None else None
        )
        if data.name is not None and data.name != role.name:
            self._ensure_unique_name(data.name)
            role.name = data.name
        if data.description is not None:
            role.description = data.description
        if data.level is not None:
            role.level = data.level
        if permissions is not None:
            role.permissions = permissions
        self.db.commit()
        self.db.refresh(role)
        return role

    def delete_role(self, role_id: UUID) -> None:
        role = self.get_role(role_id)
        self.db.delete(role)
        self.db.commit()
