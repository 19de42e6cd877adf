"""
Authentication step: bearer token -> principal.

Rejections:
- no token, bad token, expired token, or a token whose principal no longer
  exists -> Unauthenticated
- valid token for a deactivated principal -> Forbidden

The activity flag is read on every call, so deactivating an account revokes
tokens that were issued before the change.
"""
import logging
from typing import Optional

from accessguard.core.exceptions import (
    ExpiredToken,
    Forbidden,
    InvalidToken,
    NotFound,
    Unauthenticated,
)
from accessguard.models import User
from accessguard.services.credential_store import CredentialStore
from accessguard.services.token_codec import TokenCodec

logger = logging.getLogger(__name__)


class Authenticator:
    def __init__(self, codec: TokenCodec, store: CredentialStore):
        self.codec = codec
        self.store = store

    def authenticate(self, raw_token: Optional[str]) -> User:
        if raw_token is None or not raw_token.strip():
            raise Unauthenticated("No credential supplied.", reason="no_credential")

        try:
            claims = self.codec.verify(raw_token.strip())
        except ExpiredToken as exc:
            raise Unauthenticated(exc.message, reason="expired_token") from exc
        except InvalidToken as exc:
            raise Unauthenticated(exc.message, reason="invalid_token") from exc

        try:
            principal = self.store.find_principal_by_id(claims.principal_id)
        except NotFound as exc:
            logger.warning("Token for missing principal %s", claims.principal_id)
            raise Unauthenticated(
                "Principal no longer exists.",
                reason="principal_not_found",
            ) from exc

        if not principal.is_active:
            raise Forbidden(
                "Account deactivated. Contact administrator.",
                reason="account_deactivated",
            )

        return principal
