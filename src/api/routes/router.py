"""Route aggregator: registers every router under the main API router.

Usage:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.error_tracking.router import router as error_tracking_router
from api.routes.health.router import router as health_router
from api.routes.leads.router import router as leads_router
from api.routes.phone_clicks.router import router as phone_clicks_router


def create_api_router() -> APIRouter:
    """Creates the main router with every sub-router registered."""
    api_router = APIRouter()

    # /health and /ready at the root
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(leads_router, prefix="/api/leads", tags=["leads"])
    api_router.include_router(
        error_tracking_router,
        prefix="/api/error-tracking",
        tags=["error-tracking"],
    )
    api_router.include_router(
        phone_clicks_router,
        prefix="/api/phone-clicks",
        tags=["phone-clicks"],
    )

    return api_router
