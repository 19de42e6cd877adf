"""
Signed, time-bounded bearer tokens.

Tokens are HS256 JWTs carrying the principal id (``sub``), the username and
an absolute expiry. The codec holds only its signing key, lifetime and clock;
it performs no I/O and is built once at application startup.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union
from uuid import UUID

from jose import JWTError, jwt

from accessguard.core.config import Settings
from accessguard.core.exceptions import ExpiredToken, InvalidToken

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    principal_id: str
    username: str
    expires_at: datetime


class TokenCodec:
    """Issue and verify bearer tokens for principals."""

    def __init__(
        self,
        secret_key: str,
        lifetime: timedelta,
        algorithm: str = "HS256",
        clock: Optional[Clock] = None,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        if lifetime <= timedelta(0):
            raise ValueError("lifetime must be positive")
        self._secret_key = secret_key
        self._lifetime = lifetime
        self._algorithm = algorithm
        self._clock = clock or utc_now

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Clock] = None) -> "TokenCodec":
        return cls(
            secret_key=settings.signing_key(),
            lifetime=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
            clock=clock,
        )

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, principal_id: Union[UUID, str], username: str) -> str:
        """Create a token for the principal, expiring after the configured lifetime."""
        issued_at = self._clock()
        expires_at = issued_at + self._lifetime
        payload = {
            "sub": str(principal_id),
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Validate signature, structure and expiry of a token.

        Raises:
            InvalidToken: bad signature, unexpected algorithm or malformed claims
            ExpiredToken: the codec's clock is at or past the encoded expiry
        """
        try:
            # Expiry is checked below against the codec clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as exc:
            raise InvalidToken() from exc

        principal_id = payload.get("sub")
        username = payload.get("username")
        exp = payload.get("exp")
        if not isinstance(principal_id, str) or not principal_id:
            raise InvalidToken()
        if not isinstance(username, str):
            raise InvalidToken()
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidToken()

        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        if self._clock() >= expires_at:
            raise ExpiredToken()

        return TokenClaims(
            principal_id=principal_id,
            username=username,
            expires_at=expires_at,
        )
