"""Credential store: persistence of user records."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import ConflictError, NotFoundError
from src.models.user import User

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "User with this email already exists"


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookups."""
    return email.strip().lower()


class UserStore:
    """Create, look up and update users.

    Email uniqueness is left to the database unique index: inserts are
    attempted directly and a violation surfaces as ``ConflictError``, so two
    concurrent registrations for one address cannot both succeed.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=normalize_email(email), password_hash=password_hash)
        self.db.add(user)
        self._commit_or_conflict()
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def get_by_id(self, user_id: UUID) -> User | None:
        return self.db.get(User, user_id)

    def update(
        self,
        user_id: UUID,
        *,
        name: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> User:
        """Partially update mutable profile fields. None means unchanged."""
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if name is not None:
            user.name = name
        if email is not None:
            user.email = normalize_email(email)
        if password_hash is not None:
            user.password_hash = password_hash

        if not self.db.is_modified(user):
            return user

        self._commit_or_conflict()
        self.db.refresh(user)
        logger.info(f"Updated user {user.id}")
        return user

    def _commit_or_conflict(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Email uniqueness violation: {e.orig}")
            raise ConflictError(EMAIL_TAKEN) from e
