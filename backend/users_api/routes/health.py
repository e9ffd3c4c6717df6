"""
Users API - Health Check Route
===============================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Reports version, uptime, and how many users the store holds.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

The store lives in process memory and has no external dependencies, so the
service is healthy whenever it can answer this request.
"""

import logging
import time

from fastapi import APIRouter, Depends

from users_api import __version__
from users_api.dependencies import get_user_store
from users_api.schemas.user import HealthResponse
from users_api.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: UserStore = Depends(get_user_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        user_count=store.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
