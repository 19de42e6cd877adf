from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from accessguard.core.exceptions import Conflict, NotFound
from accessguard.models import Permission, Resource
from accessguard.schemas.permission import PermissionCreate, PermissionUpdate


class PermissionService:
    """Permission administration backing the /permissions endpoints."""

    def __init__(self, db: Session):
        self.db = db

    def _check_resource(self, resource_id) -> None:
        if resource_id is not None and not self.db.get(Resource, resource_id):
            raise NotFound("Resource not found")

    def _ensure_unique_name(self, name: str) -> None:
        if self.db.query(Permission).filter(Permission.name == name).first():
            raise Conflict(f"Permission '{name}' already exists")

    def list_permissions(self) -> List[Permission]:
        return (
            self.db.query(Permission)
            .order_by(Permission.resource, Permission.action)
            .all()
        )

    def get_permission(self, permission_id: UUID) -> Permission:
        permission = self.db.get(Permission, permission_id)
        if not permission:
            raise NotFound("Permission not found")
        return permission

    def create_permission(self, data: PermissionCreate) -> Permission:
        self._ensure_unique_name(data.name)
        self._check_resource(data.resource_id)
        permission = Permission(**data.model_dump())
        self.db.add(permission)
        self.db.commit()
        self.db.refresh(permission)
        return permission

    def update_permission(self, permission_id: UUID, data: PermissionUpdate) -> Permission:
        permission = self.get_permission(permission_id)
        changes = data.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] != permission.name:
            self._ensure_unique_name(changes["name"])
        if "resource_id" in changes:
            self._check_resource(changes["resource_id"])
        for field, value in changes.items():
            setattr(permission, field, value)
        self.db.commit()
        self.db.refresh(permission)
        return permission

    def delete_permission(self, permission_id: UUID) -> None:
        permission = self.get_permission(permission_id)
        self.db.delete(permission)
        self.db.commit()
