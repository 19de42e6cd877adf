"""
Error taxonomy shared by the access-control engine and its HTTP consumers.

AuthError subclasses describe rejected credentials or insufficient
privileges. ServiceError subclasses describe failures of the operation or
of the credential store. TokenError subclasses never leave the
authentication step: they are translated into Unauthenticated there.
"""
from typing import Any, Dict, Optional


class AccessGuardError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


# --- Token codec ---


class TokenError(AccessGuardError):
    """The bearer token could not be accepted."""


class InvalidToken(TokenError):
    def __init__(self, message: str = "Invalid token."):
        super().__init__(message)


class ExpiredToken(TokenError):
    def __init__(self, message: str = "Token expired."):
        super().__init__(message)


# --- Authentication / authorization ---


class AuthError(AccessGuardError):
    """Rejection produced by the authentication or authorization step."""

    status_code = 401

    def __init__(
        self,
        message: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.reason = reason
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        return {"detail": self.message, **self.details}


class Unauthenticated(AuthError):
    """No usable credential, or the credential no longer maps to a principal."""

    status_code = 401


class Forbidden(AuthError):
    """The principal is known but may not perform the operation."""

    status_code = 403


# --- Operations / store ---


class ServiceError(AccessGuardError):
    status_code = 500


class NotFound(ServiceError):
    status_code = 404


class AmbiguousResult(ServiceError):
    """A lookup by a unique key returned more than one row."""

    status_code = 409


class Conflict(ServiceError):
    status_code = 409


class PolicyViolation(ServiceError):
    status_code = 400


class StoreError(ServiceError):
    """The credential store failed; surfaced to clients as a generic failure."""

    status_code = 500
