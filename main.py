import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notifyhub.config import LOG_FORMAT, get_settings
from notifyhub.infrastructure.database import engine, initialize_database
from notifyhub.infrastructure.notifications import notification_manager
from notifyhub.infrastructure.queues import celery_app
from notifyhub.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise the database on startup and release resources on shutdown.

    Shutdown closes live websockets first so no client keeps a room open,
    then the broker connections, then the database engine.
    """

    initialize_database()
    yield
    await notification_manager.close_all()
    celery_app.close()
    engine.dispose()
    logger.info("Notification service stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    app = FastAPI(title="NotifyHub", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
