"""Main FastAPI application for the Players API service."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response

from players_api.core import DatabaseManager, Settings, check_health, get_settings, setup_logging
from players_api.features.players.hasher import PasslibHasher
from players_api.features.players.router import router as players_router
from players_api.tasks import EventNotifier, RabbitMQEventBus

logger = structlog.get_logger(__name__)


async def _start_event_bus(settings: Settings) -> Optional[RabbitMQEventBus]:
    """Connect to the event bus when one is configured."""
    if not settings.rabbitmq_url:
        logger.info("No event bus configured, player events will only be logged")
        return None

    event_bus = RabbitMQEventBus(settings.rabbitmq_url, settings.rabbitmq_routing_key)
    await event_bus.connect()
    return event_bus


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its collaborators.

    :param settings: Service settings, loaded from the environment when None
    :returns: Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            "Starting players service",
            version=settings.app_version,
            commit=settings.commit_hash,
            build_date=settings.build_date,
        )

        app.state.db_manager = DatabaseManager(settings)
        app.state.hasher = PasslibHasher()
        app.state.event_bus = await _start_event_bus(settings)
        app.state.notifier = EventNotifier(
            event_bus=app.state.event_bus,
            timeout_to_publish=settings.timeout_to_publish_sec,
            queue_size=settings.event_queue_size,
        )
        await app.state.notifier.start()
        app.state.health_checkers = [app.state.notifier, app.state.db_manager]

        yield

        logger.info("Shutting down players service")
        await app.state.notifier.stop()
        if app.state.event_bus is not None:
            await app.state.event_bus.close()
        await app.state.db_manager.close()

    app = FastAPI(
        title="Players API",
        description="Create, update, delete and search players.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    app.include_router(players_router)

    @app.get("/healthz", tags=["health"])
    async def healthz():
        """Report the health of every service resource."""
        report = await check_health(
            app.state.health_checkers,
            version=settings.app_version,
            commit=settings.commit_hash,
            build=settings.build_date,
        )
        status_code = 200 if report.healthy else 500
        return JSONResponse(
            status_code=status_code,
            content={"info": report.info, "resources": report.resources},
        )

    @app.get("/readyz", tags=["health"])
    async def readyz():
        return Response(status_code=200)

    return app
