"""FastAPI dependencies for authentication and database."""

import logging
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import UnauthenticatedError
from src.services.auth import AuthService
from src.services.passwords import PasswordHasher, get_password_hasher
from src.services.posts import PostStore
from src.services.tokens import TokenService, get_token_service
from src.services.users import UserStore

logger = logging.getLogger(__name__)

# auto_error is off so a missing header goes through the same 401 path as a bad token
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Who is calling. Carries the user id only; profiles are looked up by handlers."""

    user_id: UUID


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity:
    """Authenticate the request from its bearer token.

    Absent, malformed, forged and expired tokens all produce the same error.
    """
    if credentials is None:
        logger.debug("No bearer credentials on request")
        raise UnauthenticatedError()

    user_id = tokens.validate(credentials.credentials)
    if user_id is None:
        raise UnauthenticatedError()

    return Identity(user_id=user_id)


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, hasher, tokens)


def get_user_store(
    db: Annotated[Session, Depends(get_db)],
) -> UserStore:
    """Get user store with dependencies."""
    return UserStore(db)


def get_post_store(
    db: Annotated[Session, Depends(get_db)],
) -> PostStore:
    """Get post store with dependencies."""
    return PostStore(db)
