"""
DualPost Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Real stores over throwaway backends, so the adapters' actual statements
       run without a PostgreSQL or MongoDB server.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── sqlite_engine: In-memory SQLite engine (aiosqlite) with the posts table
    ├── pg_store: PostgresPostStore over sqlite_engine
    ├── mongo_collection: mongomock-motor collection
    ├── mongo_store: MongoPostStore over mongo_collection
    ├── app: Fresh FastAPI app with both store dependencies overridden
    └── test_client: HTTPX AsyncClient talking to `app` through ASGITransport
"""

import os
from uuid import uuid4

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from dualpost.config import Settings
from dualpost.database import create_session_factory, create_tables
from dualpost.dependencies import get_mongo_store, get_pg_store
from dualpost.services.mongo_store import MongoPostStore
from dualpost.services.pg_store import PostgresPostStore


@pytest.fixture
def sample_post_data():
    """A complete create/update body."""
    return {"title": "A", "author": "B", "content": "C"}


@pytest_asyncio.fixture
async def sqlite_engine():
    """
    In-memory SQLite engine with the posts table created.

    StaticPool keeps the single in-memory database alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def pg_store(sqlite_engine):
    """Relational store backed by the in-memory engine."""
    return PostgresPostStore(sqlite_engine, create_session_factory(sqlite_engine))


@pytest.fixture
def mongo_collection():
    """A fresh in-memory posts collection."""
    client = AsyncMongoMockClient()
    return client[f"dualpost_test_{uuid4().hex}"]["posts"]


@pytest.fixture
def mongo_store(mongo_collection):
    """Document store backed by the in-memory collection."""
    return MongoPostStore(mongo_collection)


@pytest.fixture
def app(pg_store, mongo_store):
    """
    A fresh app with both stores injected through dependency overrides.

    ASGITransport does not run the lifespan, so no real client is built.
    """
    from dualpost.main import create_app

    application = create_app(Settings())
    application.dependency_overrides[get_pg_store] = lambda: pg_store
    application.dependency_overrides[get_mongo_store] = lambda: mongo_store
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/posts/pg")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
