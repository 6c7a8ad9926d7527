"""Health check endpoint for the webhook service."""

import time
from typing import Any

from fastapi import APIRouter

from wacloud.core.config.settings import Settings


def create_health_router(settings: Settings) -> APIRouter:
    """
    Create the health router.

    Args:
        settings: Configuration of the application serving the route

    Returns:
        APIRouter exposing ``GET /health``
    """
    router = APIRouter(tags=["Health"])

    @router.get("/health")
    async def health_check() -> dict[str, Any]:
        """Report liveness together with the environment and version."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": settings.environment,
            "version": settings.version,
        }

    return router
