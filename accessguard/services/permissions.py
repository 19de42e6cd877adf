"""
Permission aggregation.

Pure functions over an already-loaded principal: no store access happens
here, so a single request evaluates against one consistent snapshot.
"""
from typing import FrozenSet


def permission_key(action: str, resource: str) -> str:
    """Canonical ``action:resource`` key shared with the UI."""
    return f"{action}:{resource}"


def aggregate_permissions(principal) -> FrozenSet[str]:
    """
    Effective permission set of a principal.

    Union of the permission keys of every role the principal holds. Two
    permission rows with the same (action, resource) collapse to one key.
    A principal without roles yields an empty set.
    """
    keys = set()
    for role in principal.roles:
        for permission in role.permissions:
            keys.add(permission_key(permission.action, permission.resource))
    return frozenset(keys)


def role_names(principal) -> FrozenSet[str]:
    return frozenset(role.name for role in principal.roles)
