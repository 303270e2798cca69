"""
Postboard Backend — Post Service (Business Logic)
===================================================

What:  List, create, fetch, replace and delete posts.
How:   One SQLAlchemy statement per operation against the request's session.
Who:   Called by route handlers in routes/posts.py.

Error Handling Strategy:
    - Malformed identifiers raise ValidationError before the session is used
    - Missing rows raise NotFoundError
    - Anything the database layer throws is logged with detail and wrapped
      in DatabaseError so the client only ever sees a generic message
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import DatabaseError, NotFoundError, ValidationError
from postboard.models.post import Post
from postboard.schemas.post import (
    PostCreatedResponse,
    PostDeletedResponse,
    PostInput,
    PostResponse,
    PostUpdatedResponse,
)

logger = logging.getLogger(__name__)


def parse_post_id(raw_id: str) -> UUID:
    """
    Convert a path parameter into a post identifier.

    Raises:
        ValidationError: The value is not a well-formed UUID (→ 400)
    """
    try:
        return UUID(str(raw_id))
    except (ValueError, TypeError):
        raise ValidationError(
            message="Invalid ID format",
            field="id",
            context={"value": str(raw_id)[:64]},
        )


def to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        author=post.author,
        title=post.title,
        description=post.description,
        image_url=post.image_url,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class PostService:
    """
    Business logic layer for post operations.

    Stateless: every method receives the session to work with.
    """

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """All posts, oldest first. No filtering or pagination."""
        try:
            result = await db.execute(select(Post).order_by(asc(Post.created_at)))
            posts = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve posts",
                context={"error_type": type(e).__name__},
            )

        return [to_response(post) for post in posts]

    async def create_post(self, db: AsyncSession, payload: PostInput) -> PostCreatedResponse:
        """
        Persist a new post from a validated payload.

        The store assigns the id. created_at falls back to the column
        default when the client did not send one.
        """
        post = Post(
            author=payload.author,
            title=payload.title,
            description=payload.description,
            image_url=payload.image_url,
        )
        if payload.created_at is not None:
            post.created_at = payload.created_at

        try:
            db.add(post)
            await db.flush()
        except Exception as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create Post",
                context={"error_type": type(e).__name__},
            )

        logger.info("Post created: %s", post.id)
        return PostCreatedResponse(id=post.id)

    async def get_post(self, db: AsyncSession, raw_id: str) -> PostResponse:
        """
        Retrieve a single post.

        Raises:
            ValidationError: Malformed id (→ 400)
            NotFoundError: No post with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        post_id = parse_post_id(raw_id)
        post = await self._load(db, post_id, operation="fetching")
        return to_response(post)

    async def update_post(
        self, db: AsyncSession, raw_id: str, payload: PostInput
    ) -> PostUpdatedResponse:
        """
        Replace every client-owned field of an existing post.

        created_at is only overwritten when the payload carries one.
        """
        post_id = parse_post_id(raw_id)
        post = await self._load(db, post_id, operation="updating")

        post.author = payload.author
        post.title = payload.title
        post.description = payload.description
        post.image_url = payload.image_url
        if payload.created_at is not None:
            post.created_at = payload.created_at

        try:
            # updated_at is set by the column's onupdate during flush
            await db.flush()
        except Exception as e:
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Internal server error",
                context={"post_id": str(post_id)},
            )

        logger.info("Post updated: %s", post_id)
        return PostUpdatedResponse(post=to_response(post))

    async def delete_post(self, db: AsyncSession, raw_id: str) -> PostDeletedResponse:
        """Remove a post and return what was stored."""
        post_id = parse_post_id(raw_id)
        post = await self._load(db, post_id, operation="deleting")
        deleted = to_response(post)

        try:
            await db.delete(post)
            await db.flush()
        except Exception as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Internal server error",
                context={"post_id": str(post_id)},
            )

        logger.info("Post deleted: %s", post_id)
        return PostDeletedResponse(deleted_post=deleted)

    async def _load(self, db: AsyncSession, post_id: UUID, operation: str) -> Post:
        post: Optional[Post] = None
        try:
            result = await db.execute(select(Post).where(Post.id == post_id))
            post = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error %s post %s: %s", operation, post_id, str(e))
            raise DatabaseError(
                message="Failed to fetch post",
                context={"post_id": str(post_id)},
            )

        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
