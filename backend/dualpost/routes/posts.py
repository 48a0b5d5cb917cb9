"""
DualPost Backend — Post CRUD Route Handlers
============================================

What:  One router factory producing the five CRUD endpoints for a backend.
Why:   The pg and mongo surfaces are identical apart from the store behind
       them; build_posts_router() is called once per store.
How:   Each handler resolves its store through the injected dependency, makes
       exactly one store call, and maps the outcome:

       ┌────────────┬──────────────────┬───────────────────────────────┐
       │ Handler    │ Success          │ Store signal → response       │
       ├────────────┼──────────────────┼───────────────────────────────┤
       │ create     │ 201 + record     │ StorageError → 500            │
       │ list       │ 200 + [records]  │ StorageError → 500            │
       │ get        │ 200 + record     │ None → 404, StorageError→500  │
       │ update     │ 200 + record     │ None → 404, StorageError→500  │
       │ delete     │ 204, empty body  │ False → 404, StorageError→500 │
       └────────────┴──────────────────┴───────────────────────────────┘

       404 and 500 bodies are produced by the global exception handlers.
"""

import logging
from typing import Callable, List, Optional

from fastapi import APIRouter, Body, Depends, Response

from dualpost.exceptions import PostNotFoundError
from dualpost.schemas.post import ErrorResponse, PostInput, PostResponse
from dualpost.services.store_base import PostStore

logger = logging.getLogger(__name__)

NOT_FOUND = {"description": "Post not found", "model": ErrorResponse}
SERVER_ERROR = {"description": "Storage failure", "model": ErrorResponse}


def build_posts_router(
    backend: str,
    store_dependency: Callable[..., PostStore],
) -> APIRouter:
    """
    Build the CRUD router mounted at /api/posts/{backend}.

    Args:
        backend: Path segment and OpenAPI tag suffix ("pg" or "mongo")
        store_dependency: FastAPI dependency returning the PostStore to use
    """
    router = APIRouter(prefix=f"/api/posts/{backend}", tags=[f"Posts ({backend})"])

    @router.post(
        "",
        status_code=201,
        response_model=PostResponse,
        response_model_exclude_none=True,
        responses={500: SERVER_ERROR},
        summary=f"Create a post in {backend}",
    )
    async def create_post(
        payload: Optional[PostInput] = Body(default=None),
        store: PostStore = Depends(store_dependency),
    ) -> PostResponse:
        """
        Create a post.

        No field-level checks here: a missing title, author or content is
        handed to the store as None and rejected there (500).
        """
        data = payload or PostInput()
        logger.debug("Create request for %s: %s", backend, data.model_dump())
        return await store.create(data)

    @router.get(
        "",
        response_model=List[PostResponse],
        response_model_exclude_none=True,
        responses={500: SERVER_ERROR},
        summary=f"List all posts in {backend}, newest first",
    )
    async def list_posts(
        store: PostStore = Depends(store_dependency),
    ) -> List[PostResponse]:
        return await store.list()

    @router.get(
        "/{post_id}",
        response_model=PostResponse,
        response_model_exclude_none=True,
        responses={404: NOT_FOUND, 500: SERVER_ERROR},
        summary=f"Get a single post from {backend}",
    )
    async def get_post(
        post_id: str,
        store: PostStore = Depends(store_dependency),
    ) -> PostResponse:
        post = await store.get(post_id)
        if post is None:
            raise PostNotFoundError(backend=backend, post_id=post_id)
        return post

    @router.put(
        "/{post_id}",
        response_model=PostResponse,
        response_model_exclude_none=True,
        responses={404: NOT_FOUND, 500: SERVER_ERROR},
        summary=f"Replace a post in {backend}",
    )
    async def update_post(
        post_id: str,
        payload: Optional[PostInput] = Body(default=None),
        store: PostStore = Depends(store_dependency),
    ) -> PostResponse:
        """
        Full replace of title, author and content.

        There is no partial update: an omitted field is written as None.
        """
        data = payload or PostInput()
        post = await store.update(post_id, data)
        if post is None:
            raise PostNotFoundError(backend=backend, post_id=post_id)
        return post

    @router.delete(
        "/{post_id}",
        status_code=204,
        response_class=Response,
        responses={404: NOT_FOUND, 500: SERVER_ERROR},
        summary=f"Delete a post from {backend}",
    )
    async def delete_post(
        post_id: str,
        store: PostStore = Depends(store_dependency),
    ) -> Response:
        if not await store.delete(post_id):
            raise PostNotFoundError(backend=backend, post_id=post_id)
        return Response(status_code=204)

    return router
