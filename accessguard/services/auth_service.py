"""
Authentication service for AccessGuard
Handles registration and password login.

Unknown usernames and wrong passwords are audited with distinct reasons but
answered with the same external message, so the login endpoint cannot be
used to probe which usernames exist.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from accessguard.core.config import settings
from accessguard.core.exceptions import Conflict, Forbidden, NotFound, Unauthenticated
from accessguard.core.security import hash_password, verify_password
from accessguard.models import Role, User
from accessguard.services.audit_logger import AuditInterceptor, AuditStatus
from accessguard.services.credential_store import CredentialStore
from accessguard.services.token_codec import TokenCodec

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Authentication service for user login and registration."""

    def __init__(self, db: Session, codec: TokenCodec, auditor: AuditInterceptor):
        self.db = db
        self.codec = codec
        self.auditor = auditor
        self.store = CredentialStore(db)

    def _find_by_username(self, username: str) -> Optional[User]:
        try:
            return self.store.find_principal_by_username(username)
        except NotFound:
            return None

    def register(self, username: str, email: str, password: str, full_name: str) -> User:
        """Register a new account holding the default role."""
        existing = (
            self.db.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        if existing:
            raise Conflict("Username or email already exists")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            is_active=True,
        )
        default_role = (
            self.db.query(Role).filter(Role.name == settings.DEFAULT_ROLE_NAME).first()
        )
        if default_role:
            user.roles.append(default_role)
        else:
            logger.warning("Default role %s is missing", settings.DEFAULT_ROLE_NAME)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        self.auditor.record(
            user.id, "register", "auth", AuditStatus.SUCCESS, {"username": username}
        )
        return user

    def login(self, username: str, password: str) -> Tuple[User, str]:
        """Authenticate with username/password and issue a bearer token."""
        user = self._find_by_username(username)

        if user is None:
            self.auditor.record(
                None,
                "login_failed",
                "auth",
                AuditStatus.FAILED,
                {"username": username, "reason": "user_not_found"},
            )
            raise Unauthenticated(INVALID_CREDENTIALS, reason="user_not_found")

        if not verify_password(password, user.password_hash):
            self.auditor.record(
                user.id,
                "login_failed",
                "auth",
                AuditStatus.FAILED,
                {"username": username, "reason": "wrong_password"},
            )
            raise Unauthenticated(INVALID_CREDENTIALS, reason="wrong_password")

        if not user.is_active:
            self.auditor.record(
                user.id,
                "login_failed",
                "auth",
                AuditStatus.FAILED,
                {"username": username, "reason": "inactive_account"},
            )
            raise Forbidden("Account is inactive", reason="inactive_account")

        user.update_last_login()
        self.db.commit()

        token = self.codec.issue(user.id, user.username)
        self.auditor.record(
            user.id, "login", "auth", AuditStatus.SUCCESS, {"username": username}
        )
        return user, token
