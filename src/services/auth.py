"""Registration, login and profile changes."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from src.errors import UnauthenticatedError
from src.models.user import User
from src.services.passwords import PasswordHasher
from src.services.tokens import IssuedToken, TokenService
from src.services.users import UserStore

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid email or password"


class AuthService:
    """Ties the credential store, hasher and token service together."""

    def __init__(self, db: Session, hasher: PasswordHasher, tokens: TokenService):
        self.users = UserStore(db)
        self.hasher = hasher
        self.tokens = tokens

    def register(self, name: str, email: str, password: str) -> tuple[User, IssuedToken]:
        """Create a user and sign them in. Raises ConflictError on a taken email."""
        user = self.users.create(name, email, self.hasher.hash(password))
        return user, self.tokens.issue(user.id)

    def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and password."""
        user = self.users.get_by_email(email)
        if user is None:
            # Keep unknown-email attempts as slow as wrong-password ones
            self.hasher.dummy_verify()
            return None
        if not self.hasher.verify(password, user.password_hash):
            return None
        if self.hasher.needs_rehash(user.password_hash):
            user = self.users.update(user.id, password_hash=self.hasher.hash(password))
            logger.info(f"Re-hashed password for user {user.id} under current cost factor")
        return user

    def login(self, email: str, password: str) -> tuple[User, IssuedToken]:
        user = self.authenticate(email, password)
        if user is None:
            logger.info("Failed login attempt")
            raise UnauthenticatedError(INVALID_LOGIN)
        logger.info(f"User {user.id} logged in")
        return user, self.tokens.issue(user.id)

    def update_profile(
        self,
        user_id: UUID,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        password_hash = self.hasher.hash(password) if password is not None else None
        return self.users.update(user_id, name=name, email=email, password_hash=password_hash)
