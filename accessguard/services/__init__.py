"""
AccessGuard Services Module.

Engine:
    - TokenCodec: signed, time-bounded bearer tokens
    - Authenticator: bearer token -> active principal
    - aggregate_permissions / authorize_by_permission / authorize_by_role
    - AuditInterceptor: exactly-once, fire-and-forget audit records
    - CredentialStore: engine-facing reads and audit appends

Consumers:
    - AuthService, UserService, RoleService, PermissionService,
      ResourceService, AuditLogService
"""

from .audit_logger import AuditContext, AuditInterceptor, AuditStatus, Outcome, classify_outcome
from .authentication import Authenticator
from .authorization import authorize_by_permission, authorize_by_role
from .credential_store import AuditEntry, CredentialStore
from .permissions import aggregate_permissions, permission_key, role_names
from .token_codec import TokenClaims, TokenCodec

__all__ = [
    "AuditContext",
    "AuditEntry",
    "AuditInterceptor",
    "AuditStatus",
    "Authenticator",
    "CredentialStore",
    "Outcome",
    "TokenClaims",
    "TokenCodec",
    "aggregate_permissions",
    "authorize_by_permission",
    "authorize_by_role",
    "classify_outcome",
    "permission_key",
    "role_names",
]
