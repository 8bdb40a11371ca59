from fastapi import FastAPI

from .deliveries import router as deliveries_router
from .health import router as health_router
from .notifications import router as notifications_router
from .preferences import router as preferences_router
from .templates import router as templates_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(notifications_router)
    app.include_router(preferences_router)
    app.include_router(templates_router)
    app.include_router(deliveries_router)
