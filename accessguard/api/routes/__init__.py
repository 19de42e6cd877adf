# Export every router
from . import audit, auth, health, permissions, resources, roles, users

__all__ = ["audit", "auth", "health", "permissions", "resources", "roles", "users"]
