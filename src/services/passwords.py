"""Password hashing with bcrypt via passlib.

A stored hash is a bcrypt modular-crypt string (``$2b$<cost>$<salt+digest>``)
that records the cost factor and salt it was created with, so verification
never depends on the currently configured cost.
"""

import logging
from functools import lru_cache

from passlib.context import CryptContext

from src.config import get_settings

logger = logging.getLogger(__name__)

# bcrypt only digests this many bytes of input and silently drops the rest
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


class PasswordHasher:
    """Salted one-way hashing with constant-time verification."""

    def __init__(self, rounds: int):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__default_rounds=rounds,
            # Hashes below the configured cost still verify; they are only flagged for rehash
            bcrypt__min_rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a password under the configured cost factor."""
        if password_too_long(password):
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a password against its hash.

        Malformed or foreign hashes count as a mismatch, and so does any
        password longer than bcrypt can compare in full.
        """
        if password_too_long(password):
            self.dummy_verify()
            return False
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False

    def dummy_verify(self) -> None:
        """Spend the time of one verification without a stored hash."""
        self._context.dummy_verify()

    def needs_rehash(self, hashed_password: str) -> bool:
        """Check whether a hash was made under a weaker cost factor."""
        try:
            return self._context.needs_update(hashed_password)
        except (ValueError, TypeError):
            return False


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get the process-wide hasher built from settings."""
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)
