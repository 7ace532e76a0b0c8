"""Post store with ownership enforcement."""

import logging
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.orm import Session, joinedload

from src.errors import ForbiddenError, NotFoundError
from src.models.mixins import utcnow
from src.models.post import Post

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"


class PostStore:
    """CRUD over posts where only the owner may mutate or delete.

    Existence is always checked before ownership, so an authenticated caller
    can tell "does not exist" (404) from "exists but is not yours" (403).
    That disclosure is intentional and must not be folded into a single 404
    without revisiting the API contract.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, owner_id: UUID, title: str, body: str) -> Post:
        post = Post(owner_id=owner_id, title=title, body=body)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info(f"User {owner_id} created post {post.id}")
        return post

    def list_all(self) -> list[Post]:
        return (
            self.db.query(Post)
            .options(joinedload(Post.owner))
            .order_by(Post.created_at.desc(), Post.id)
            .all()
        )

    def list_by_owner(self, owner_id: UUID) -> list[Post]:
        return (
            self.db.query(Post)
            .options(joinedload(Post.owner))
            .filter(Post.owner_id == owner_id)
            .order_by(Post.created_at.desc(), Post.id)
            .all()
        )

    def get(self, post_id: UUID) -> Post:
        post = (
            self.db.query(Post).options(joinedload(Post.owner)).filter(Post.id == post_id).first()
        )
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        return post

    def update(self, post_id: UUID, caller_id: UUID, changes: dict[str, str]) -> Post:
        """Apply ``changes`` (title/body) to a post the caller owns."""
        post = self._get_owned_for_write(post_id, caller_id)
        values = {key: value for key, value in changes.items() if key in ("title", "body")}
        if not values:
            self.db.rollback()
            return post

        values["updated_at"] = utcnow()
        # The owner condition makes check-and-write a single atomic statement
        result = self.db.execute(
            update(Post)
            .where(Post.id == post_id, Post.owner_id == caller_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundError(POST_NOT_FOUND)
        self.db.commit()
        self.db.refresh(post)
        logger.info(f"User {caller_id} updated post {post_id}: {sorted(values)}")
        return post

    def delete(self, post_id: UUID, caller_id: UUID) -> None:
        post = self._get_owned_for_write(post_id, caller_id)
        result = self.db.execute(
            delete(Post)
            .where(Post.id == post_id, Post.owner_id == caller_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundError(POST_NOT_FOUND)
        # The bulk delete bypasses the identity map, so drop the loaded row by hand
        self.db.expunge(post)
        self.db.commit()
        logger.info(f"User {caller_id} deleted post {post_id}")

    def _get_owned_for_write(self, post_id: UUID, caller_id: UUID) -> Post:
        # Existence first, then ownership
        post = self.db.query(Post).filter(Post.id == post_id).with_for_update().first()
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        if post.owner_id != caller_id:
            self.db.rollback()
            logger.info(f"User {caller_id} denied write access to post {post_id}")
            raise ForbiddenError("You don't have permission to modify this post")
        return post
