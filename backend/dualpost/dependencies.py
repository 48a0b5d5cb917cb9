"""
DualPost Backend — Store Dependencies
======================================

What:  FastAPI dependencies resolving the store instances for a request.
Why:   Stores are built once in the lifespan and attached to app.state; routes
       receive them through Depends() instead of importing a module global.
How:   Tests replace a store with app.dependency_overrides[get_pg_store] = ...
"""

from fastapi import Request

from dualpost.services.store_base import PostStore


def get_pg_store(request: Request) -> PostStore:
    """The relational store created by the lifespan."""
    return request.app.state.pg_store


def get_mongo_store(request: Request) -> PostStore:
    """The document store created by the lifespan."""
    return request.app.state.mongo_store
