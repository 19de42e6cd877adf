"""
Import every model in one place so relationships resolve and
``Base.metadata`` knows all tables.

Usage:
    from accessguard.models import User, Role, Permission
"""

from .audit import AuditRecord
from .permission import Permission
from .resource import Resource
from .role import Role, role_permissions
from .user import User, user_roles

__all__ = [
    "AuditRecord",
    "Permission",
    "Resource",
    "Role",
    "User",
    "role_permissions",
    "user_roles",
]
