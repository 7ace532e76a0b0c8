"""Post API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.dependencies import CurrentIdentity, get_post_store
from src.schemas.common import ApiResponse, error_responses
from src.schemas.post import PostCreate, PostResponse, PostUpdate
from src.services.posts import PostStore

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.get("", response_model=ApiResponse[list[PostResponse]])
async def get_posts(
    posts: Annotated[PostStore, Depends(get_post_store)],
):
    """Get all posts. Public."""
    result = [PostResponse.model_validate(post) for post in posts.list_all()]
    return ApiResponse(message=f"Retrieved {len(result)} posts", data=result)


@router.post(
    "",
    response_model=ApiResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(401, 422),
)
async def create_post(
    post_data: PostCreate,
    identity: CurrentIdentity,
    posts: Annotated[PostStore, Depends(get_post_store)],
):
    """Create a post owned by the caller."""
    post = posts.create(identity.user_id, post_data.title, post_data.body)
    return ApiResponse(
        message=f"Post '{post.title}' created successfully",
        data=PostResponse.model_validate(post),
    )


# Declared before /{post_id} so "my" is never parsed as an id
@router.get("/my", response_model=ApiResponse[list[PostResponse]], responses=error_responses(401))
async def get_my_posts(
    identity: CurrentIdentity,
    posts: Annotated[PostStore, Depends(get_post_store)],
):
    """Get the caller's own posts."""
    result = [PostResponse.model_validate(post) for post in posts.list_by_owner(identity.user_id)]
    return ApiResponse(message=f"Retrieved {len(result)} posts", data=result)


@router.get(
    "/{post_id}", response_model=ApiResponse[PostResponse], responses=error_responses(404, 422)
)
async def get_post(
    post_id: UUID,
    posts: Annotated[PostStore, Depends(get_post_store)],
):
    """Get a specific post. Public."""
    post = posts.get(post_id)
    return ApiResponse(
        message="Post retrieved successfully",
        data=PostResponse.model_validate(post),
    )


@router.put(
    "/{post_id}",
    response_model=ApiResponse[PostResponse],
    responses=error_responses(401, 403, 404, 422),
)
async def update_post(
    post_id: UUID,
    post_data: PostUpdate,
    identity: CurrentIdentity,
    posts: Annotated[PostStore, Depends(get_post_store)],
):
    """Update a post (owner only)."""
    post = posts.update(post_id, identity.user_id, post_data.changes())
    return ApiResponse(
        message=f"Post '{post.title}' updated successfully",
        data=PostResponse.model_validate(post),
    )


@router.delete(
    "/{post_id}",
    response_model=ApiResponse[None],
    responses=error_responses(401, 403, 404, 422),
)
async def delete_post(
    post_id: UUID,
    identity: CurrentIdentity,
    posts: Annotated[PostStore, Depends(get_post_store)],
):
    """Delete a post (owner only)."""
    posts.delete(post_id, identity.user_id)
    return ApiResponse(message="Post deleted successfully")
