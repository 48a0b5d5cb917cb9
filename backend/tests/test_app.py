"""
DualPost Backend — Application Plumbing Tests
==============================================

What:  Tests for the root page, static assets, and the health check.
How:   Health tests swap in mock stores whose health_check() is scripted.
"""

import pytest
from unittest.mock import AsyncMock

from dualpost.dependencies import get_mongo_store, get_pg_store


def _store(reachable):
    store = AsyncMock()
    store.health_check = AsyncMock(return_value=reachable)
    return store


class TestStaticFiles:

    @pytest.mark.asyncio
    async def test_root_serves_index(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "DualPost" in response.text

    @pytest.mark.asyncio
    async def test_static_asset(self, test_client):
        response = await test_client.get("/app.js")

        assert response.status_code == 200
        assert "/api/posts/" in response.text

    @pytest.mark.asyncio
    async def test_unknown_asset_is_404(self, test_client):
        response = await test_client.get("/missing.css")

        assert response.status_code == 404


class TestHealth:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "pg_ok, mongo_ok, expected",
        [
            (True, True, "healthy"),
            (True, False, "degraded"),
            (False, True, "degraded"),
            (False, False, "unhealthy"),
        ],
    )
    async def test_health_status(self, app, test_client, pg_ok, mongo_ok, expected):
        app.dependency_overrides[get_pg_store] = lambda: _store(pg_ok)
        app.dependency_overrides[get_mongo_store] = lambda: _store(mongo_ok)

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == expected
        assert body["postgres"] == ("connected" if pg_ok else "disconnected")
        assert body["mongo"] == ("connected" if mongo_ok else "disconnected")
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_health_with_real_stores(self, test_client):
        """SQLite answers SELECT 1; mongomock's ping support varies, so only pg is asserted."""
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["postgres"] == "connected"
