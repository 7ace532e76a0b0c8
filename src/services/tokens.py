"""Stateless bearer tokens.

Tokens are HMAC-signed JWTs carrying only ``sub`` (user id), ``iat`` and
``exp``. Nothing is stored server side: a token stays valid until it expires
or the signing secret is rotated.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from uuid import UUID

from jose import JWTError, jwt

from src.config import get_settings

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "iat", "exp")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class IssuedToken:
    """An encoded token together with its validity window."""

    access_token: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and validates signed, time-bound identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
        leeway: timedelta = timedelta(seconds=30),
        now: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.leeway = leeway
        self._now = now

    def issue(self, user_id: UUID) -> IssuedToken:
        """Create a token for the given user."""
        # JWT timestamps are whole seconds
        issued_at = self._now().replace(microsecond=0)
        expires_at = issued_at + self.ttl
        claims = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=self.algorithm)
        logger.debug(f"Issued token for user {user_id}, expires {expires_at.isoformat()}")
        return IssuedToken(access_token=token, issued_at=issued_at, expires_at=expires_at)

    def validate(self, token: str) -> UUID | None:
        """Return the token's subject, or None if it must not be trusted.

        Expiry honours the grace window; issued-at in the future never does.
        """
        try:
            # Time claims are checked below against the injected clock
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            return None

        if any(claim not in claims for claim in REQUIRED_CLAIMS):
            logger.debug("Rejected token: missing required claims")
            return None

        issued_at, expires_at = claims["iat"], claims["exp"]
        if not all(
            isinstance(value, int | float) and not isinstance(value, bool)
            for value in (issued_at, expires_at)
        ):
            logger.debug("Rejected token: non-numeric time claims")
            return None

        now = self._now().timestamp()
        if issued_at > now:
            logger.debug("Rejected token: issued in the future")
            return None
        if expires_at + self.leeway.total_seconds() < now:
            logger.debug("Rejected token: expired")
            return None

        try:
            return UUID(str(claims["sub"]))
        except ValueError:
            logger.debug("Rejected token: subject is not a user id")
            return None


@lru_cache
def get_token_service() -> TokenService:
    """Get the process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_expiration_minutes),
        leeway=timedelta(seconds=settings.jwt_leeway_seconds),
    )
