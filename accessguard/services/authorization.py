"""
Authorization decider.

Two explicit policies evaluated against a principal that has already been
authenticated:

- permission policy: every required ``action:resource`` key must be held
  (AND); an empty requirement grants.
- role policy: at least one of the required role names must be held (OR);
  an empty requirement denies.

Both raise Forbidden on denial, carrying the required and available values
so that an authenticated caller can render a precise error.
"""
import logging
from typing import Iterable, List

from accessguard.core.exceptions import Forbidden, Unauthenticated
from accessguard.services.permissions import aggregate_permissions, role_names

logger = logging.getLogger(__name__)


def _require_principal(principal) -> None:
    if principal is None:
        raise Unauthenticated("Authentication required.", reason="no_principal")


def authorize_by_permission(principal, required_keys: Iterable[str]) -> None:
    """Grant only if the principal holds every required permission key."""
    _require_principal(principal)
    required: List[str] = list(required_keys)
    available = aggregate_permissions(principal)

    if all(key in available for key in required):
        return

    logger.info(
        "Permission denied | user=%s | required=%s",
        principal.id,
        required,
    )
    raise Forbidden(
        "Insufficient permissions.",
        reason="insufficient_permissions",
        details={"required": required, "available": sorted(available)},
    )


def authorize_by_role(principal, required_roles: Iterable[str]) -> None:
    """Grant if the principal holds at least one of the required roles."""
    _require_principal(principal)
    required: List[str] = list(required_roles)
    available = role_names(principal)

    # An empty requirement is never satisfied
    if any(role in available for role in required):
        return

    logger.info(
        "Role denied | user=%s | required=%s",
        principal.id,
        required,
    )
    raise Forbidden(
        "Insufficient role privileges.",
        reason="insufficient_role",
        details={"required": required, "available": sorted(available)},
    )
