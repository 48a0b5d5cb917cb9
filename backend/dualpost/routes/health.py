"""
DualPost Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Asks each store for a lightweight reachability check (SELECT 1 / ping).

Status levels:
    - healthy:   both stores reachable
    - degraded:  exactly one store reachable (the other surface still works)
    - unhealthy: neither store reachable
"""

import logging
import time

from fastapi import APIRouter, Depends

from dualpost import __version__
from dualpost.dependencies import get_mongo_store, get_pg_store
from dualpost.schemas.post import HealthResponse
from dualpost.services.store_base import PostStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    pg_store: PostStore = Depends(get_pg_store),
    mongo_store: PostStore = Depends(get_mongo_store),
) -> HealthResponse:
    """Check both stores and return the aggregate status."""
    pg_ok = await pg_store.health_check()
    mongo_ok = await mongo_store.health_check()

    if pg_ok and mongo_ok:
        overall = "healthy"
    elif pg_ok or mongo_ok:
        overall = "degraded"
    else:
        overall = "unhealthy"

    return HealthResponse(
        status=overall,
        version=__version__,
        postgres="connected" if pg_ok else "disconnected",
        mongo="connected" if mongo_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
