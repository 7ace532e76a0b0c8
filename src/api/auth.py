"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentIdentity, get_auth_service, get_user_store
from src.errors import NotFoundError
from src.models.user import User
from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate
from src.schemas.common import ApiResponse, error_responses
from src.services.auth import AuthService
from src.services.tokens import IssuedToken
from src.services.users import UserStore

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _auth_response(user: User, token: IssuedToken) -> AuthResponse:
    return AuthResponse(
        access_token=token.access_token,
        expires_at=token.expires_at,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(409, 422),
)
async def register(
    user_data: UserRegister,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    user, token = auth.register(user_data.name, user_data.email, user_data.password)
    return ApiResponse(
        message=f"User: {user.name} registered successfully",
        data=_auth_response(user, token),
    )


@router.post(
    "/login", response_model=ApiResponse[AuthResponse], responses=error_responses(401, 422)
)
async def login(
    credentials: UserLogin,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    user, token = auth.login(credentials.email, credentials.password)
    return ApiResponse(message="Login successful", data=_auth_response(user, token))


@router.get(
    "/profile", response_model=ApiResponse[UserResponse], responses=error_responses(401, 404)
)
async def get_profile(
    identity: CurrentIdentity,
    users: Annotated[UserStore, Depends(get_user_store)],
):
    """Get current user information."""
    user = users.get_by_id(identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return ApiResponse(
        message="Profile retrieved successfully",
        data=UserResponse.model_validate(user),
    )


@router.put(
    "/profile",
    response_model=ApiResponse[UserResponse],
    responses=error_responses(401, 404, 409, 422),
)
async def update_profile(
    user_data: UserUpdate,
    identity: CurrentIdentity,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Update the current user's name, email or password."""
    user = auth.update_profile(
        identity.user_id,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return ApiResponse(
        message="Profile updated successfully",
        data=UserResponse.model_validate(user),
    )
