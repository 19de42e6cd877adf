#!/usr/bin/env python3
"""
Seed the database with the default resources, permissions, roles and one
account per role.

Usage:
    python -m accessguard.db.seed
"""
import logging

from sqlalchemy.orm import Session

from accessguard.core.security import hash_password
from accessguard.db.base import Base
from accessguard.db.session import SessionLocal, engine
from accessguard.models import Permission, Resource, Role, User

logger = logging.getLogger(__name__)

RESOURCES = [
    ("users", "endpoint", "/api/v1/users", "User management"),
    ("roles", "endpoint", "/api/v1/roles", "Role management"),
    ("permissions", "endpoint", "/api/v1/permissions", "Permission management"),
    ("resources", "endpoint", "/api/v1/resources", "Resource management"),
    ("audit", "endpoint", "/api/v1/audit", "Audit logs"),
    ("dashboard", "page", "/dashboard", "Dashboard page"),
    ("reports", "page", "/reports", "Reports page"),
]

# (action, resource, description)
PERMISSIONS = [
    ("create", "users", "Create users"),
    ("read", "users", "View users"),
    ("update", "users", "Update users"),
    ("delete", "users", "Delete users"),
    ("create", "roles", "Create roles"),
    ("read", "roles", "View roles"),
    ("update", "roles", "Update roles"),
    ("delete", "roles", "Delete roles"),
    ("create", "permissions", "Create permissions"),
    ("read", "permissions", "View permissions"),
    ("update", "permissions", "Update permissions"),
    ("delete", "permissions", "Delete permissions"),
    ("read", "audit", "View audit logs"),
    ("read", "dashboard", "View dashboard"),
    ("read", "reports", "View reports"),
]

# name -> (description, level, permission keys); None grants every permission
ROLES = {
    "Admin": ("Full system access", 100, None),
    "Manager": (
        "Manage users and view reports",
        50,
        ["read:users", "update:users", "read:roles", "read:audit", "read:dashboard", "read:reports"],
    ),
    "HR": ("Manage employees", 40, ["create:users", "read:users", "update:users", "read:dashboard"]),
    "Employee": ("Basic access", 10, ["read:users", "read:dashboard"]),
}

# (username, email, password, full name, role)
USERS = [
    ("admin", "admin@accessguard.io", "Admin@123", "System Administrator", "Admin"),
    ("manager", "manager@accessguard.io", "Manager@123", "John Manager", "Manager"),
    ("hruser", "hr@accessguard.io", "HR@123", "Sarah HR", "HR"),
    ("employee", "employee@accessguard.io", "Employee@123", "Mike Employee", "Employee"),
]


def seed_database(db: Session) -> bool:
    """
    Insert the default data set.

    Returns False without touching anything when roles already exist.
    """
    if db.query(Role).first() is not None:
        logger.info("Database already seeded, skipping")
        return False

    resources = {}
    for name, type_, path, description in RESOURCES:
        resources[name] = Resource(name=name, type=type_, path=path, description=description)
        db.add(resources[name])

    permissions = {}
    for action, resource, description in PERMISSIONS:
        key = f"{action}:{resource}"
        permissions[key] = Permission(
            name=key,
            action=action,
            resource=resource,
            description=description,
            resource_detail=resources.get(resource),
        )
        db.add(permissions[key])

    roles = {}
    for name, (description, level, keys) in ROLES.items():
        role = Role(name=name, description=description, level=level)
        role.permissions = (
            list(permissions.values()) if keys is None else [permissions[k] for k in keys]
        )
        roles[name] = role
        db.add(role)

    for username, email, password, full_name, role_name in USERS:
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            is_active=True,
        )
        user.roles = [roles[role_name]]
        db.add(user)

    db.commit()
    logger.info(
        "Seeded %d resources, %d permissions, %d roles, %d users",
        len(resources),
        len(permissions),
        len(roles),
        len(USERS),
    )
    return True


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        print("🌱 Seeding database...")
        if not seed_database(db):
            print("ℹ️  Roles already present, nothing to do")
            return
        print("✅ Database seeded\n")
        print("📝 Test credentials:")
        for username, _, password, _, role_name in USERS:
            print(f"   {role_name:<9} {username} / {password}")
    except Exception as e:
        db.rollback()
        print(f"❌ Seed error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
