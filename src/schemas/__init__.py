"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate
from src.schemas.common import ApiResponse, ErrorResponse
from src.schemas.post import AuthorResponse, PostCreate, PostResponse, PostUpdate

__all__ = [
    "ApiResponse",
    "AuthResponse",
    "AuthorResponse",
    "ErrorResponse",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
    "UserLogin",
    "UserRegister",
    "UserResponse",
    "UserUpdate",
]
