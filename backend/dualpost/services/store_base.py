"""
DualPost Backend — Abstract Post Store Interface
=================================================

What:  Abstract base class defining the storage contract every backend implements.
Why:   One generic CRUD router serves both backends; it only ever talks to this
       interface. This is the Strategy design pattern.
How:   Concrete implementations inherit from PostStore and implement the five
       operations plus a health check.
Who:   Called by the router built in routes/posts.py and by the health route.

Contract summary:
    ┌──────────────────────┬──────────────────────┬───────────────────────┐
    │ Operation            │ Success              │ Absence               │
    ├──────────────────────┼──────────────────────┼───────────────────────┤
    │ create(data)         │ PostResponse         │ n/a                   │
    │ list()               │ [PostResponse, ...]  │ [] (never an error)   │
    │ get(post_id)         │ PostResponse         │ None                  │
    │ update(post_id, data)│ PostResponse         │ None                  │
    │ delete(post_id)      │ True                 │ False                 │
    └──────────────────────┴──────────────────────┴───────────────────────┘

    Every other failure is raised as StorageError.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from dualpost.schemas.post import PostInput, PostResponse


class PostStore(ABC):
    """
    Abstract interface for post persistence.

    Contract:
        - Identifiers arrive as the raw path string; each store parses it into
          its native key type. A string that cannot be parsed is a malformed
          identifier and raises StorageError, not absence.
        - Absence is signalled by return value, never by exception.
        - Implementations wrap every driver exception in StorageError.

    Implementations:
        - PostgresPostStore: SQLAlchemy async ORM over asyncpg
        - MongoPostStore: Motor collection operations
    """

    # Path segment under /api/posts/ this store is mounted at
    backend: str = ""

    @abstractmethod
    async def create(self, data: PostInput) -> PostResponse:
        """
        Insert a new post and return it with its generated id.

        Raises:
            StorageError: When the store rejects the post (missing field) or
                the driver fails.
        """
        ...

    @abstractmethod
    async def list(self) -> List[PostResponse]:
        """Return every post, newest first. An empty store returns []."""
        ...

    @abstractmethod
    async def get(self, post_id: str) -> Optional[PostResponse]:
        """Return the post with `post_id`, or None when there is none."""
        ...

    @abstractmethod
    async def update(self, post_id: str, data: PostInput) -> Optional[PostResponse]:
        """
        Replace title, author and content of `post_id` in one operation.

        Returns:
            The updated post, or None when no post matches.
        """
        ...

    @abstractmethod
    async def delete(self, post_id: str) -> bool:
        """Remove `post_id`. Returns False when there was nothing to remove."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check that the backing store is reachable.

        Who:     Called by the health endpoint and once at startup.
        Returns: True if reachable, False otherwise. Never raises.
        """
        ...
