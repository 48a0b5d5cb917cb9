"""
DualPost Backend — PostgreSQL Post Store
=========================================

What:  PostStore implementation over the relational `posts` table.
Why:   Backs the /api/posts/pg surface.
How:   Each operation opens one session from the injected factory, issues a
       single parameterized statement, and commits (see database.session_scope).

Statement map:
    create  → INSERT INTO posts (title, author, content) ... RETURNING *
    list    → SELECT * FROM posts ORDER BY id DESC
    get     → SELECT * FROM posts WHERE id = :id
    update  → UPDATE posts SET title, author, content WHERE id = :id RETURNING *
    delete  → DELETE FROM posts WHERE id = :id RETURNING id

Absence is an empty result. A NOT NULL violation (missing field) and a
non-integer identifier both surface as StorageError.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from dualpost.database import ping, session_scope
from dualpost.exceptions import StorageError
from dualpost.models.post import Post
from dualpost.schemas.post import PostInput, PostResponse
from dualpost.services.store_base import PostStore

logger = logging.getLogger(__name__)


class PostgresPostStore(PostStore):
    """
    Relational adapter.

    Holds the engine (for health checks) and the session factory (for
    statements). Both are created once by the lifespan and shared by every
    request; the store itself keeps no per-request state.
    """

    backend = "pg"

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self._engine = engine
        self._session_factory = session_factory

    async def create(self, data: PostInput) -> PostResponse:
        try:
            async with session_scope(self._session_factory) as session:
                post = Post(title=data.title, author=data.author, content=data.content)
                session.add(post)
                # Flush assigns the sequence id before the commit
                await session.flush()
                response = self._to_response(post)
            logger.info("Created post %s in postgres", response.id)
            return response
        except Exception as e:
            logger.error("Error creating post in postgres: %s", str(e))
            raise StorageError(
                message="Could not create the post",
                context={"backend": self.backend, "error_type": type(e).__name__},
            )

    async def list(self) -> List[PostResponse]:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(Post).order_by(Post.id.desc()))
                posts = [self._to_response(post) for post in result.scalars().all()]
            logger.info("Listed %d posts from postgres", len(posts))
            return posts
        except Exception as e:
            logger.error("Error listing posts from postgres: %s", str(e))
            raise StorageError(
                message="Could not list posts",
                context={"backend": self.backend, "error_type": type(e).__name__},
            )

    async def get(self, post_id: str) -> Optional[PostResponse]:
        pk = self._parse_id(post_id)
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(Post).where(Post.id == pk))
                post = result.scalar_one_or_none()
                if post is None:
                    logger.info("Post %s not found in postgres", post_id)
                    return None
                return self._to_response(post)
        except Exception as e:
            logger.error("Error retrieving post %s from postgres: %s", post_id, str(e))
            raise StorageError(
                message="Could not retrieve the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

    async def update(self, post_id: str, data: PostInput) -> Optional[PostResponse]:
        pk = self._parse_id(post_id)
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(
                    update(Post)
                    .where(Post.id == pk)
                    .values(title=data.title, author=data.author, content=data.content)
                    .returning(Post)
                )
                post = result.scalar_one_or_none()
                if post is None:
                    logger.info("Post %s not found in postgres for update", post_id)
                    return None
                response = self._to_response(post)
            logger.info("Updated post %s in postgres", post_id)
            return response
        except Exception as e:
            logger.error("Error updating post %s in postgres: %s", post_id, str(e))
            raise StorageError(
                message="Could not update the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

    async def delete(self, post_id: str) -> bool:
        pk = self._parse_id(post_id)
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(
                    delete(Post).where(Post.id == pk).returning(Post.id)
                )
                deleted_id = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error deleting post %s from postgres: %s", post_id, str(e))
            raise StorageError(
                message="Could not delete the post",
                context={"backend": self.backend, "post_id": post_id, "error_type": type(e).__name__},
            )

        if deleted_id is None:
            logger.info("Post %s not found in postgres for deletion", post_id)
            return False
        logger.info("Deleted post %s from postgres", post_id)
        return True

    async def health_check(self) -> bool:
        try:
            await ping(self._engine)
            return True
        except Exception as e:
            logger.warning("PostgreSQL unreachable: %s", str(e))
            return False

    # ── Helpers ───────────────────────────────────────────────────────────

    def _parse_id(self, post_id: str) -> int:
        """
        Convert the path segment into the integer primary key.

        PostgreSQL rejects a non-integer literal for an integer column with a
        driver error; rejecting it here produces the same StorageError without
        a round trip.
        """
        try:
            return int(post_id)
        except (TypeError, ValueError):
            logger.error("Malformed postgres post id: %r", post_id)
            raise StorageError(
                message="Malformed post identifier",
                context={"backend": self.backend, "post_id": post_id},
            )

    @staticmethod
    def _to_response(post: Post) -> PostResponse:
        return PostResponse(
            id=post.id,
            title=post.title,
            author=post.author,
            content=post.content,
        )
