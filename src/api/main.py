"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clients.dependencies.initialization import build_initialization_consumer
from clients.presentation import router as clients_router
from infrastructure.database.dependencies import close_database_connections
from infrastructure.dependencies import close_redis_client, get_redis_client
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import (
    Settings,
    get_database_settings,
    get_message_bus_settings,
    get_settings,
)
from infrastructure.version import __version__


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Application settings; read from the environment if omitted
    """
    explicit_settings = settings is not None
    settings = settings or get_settings()
    probe = DefaultStartupProbe()

    @asynccontextmanager
    async def client_management_lifespan(app: FastAPI):
        """Application lifespan context.

        Manages:
        - Logging configuration
        - Initialization consumer (started only when the bus is enabled)
        - Redis client and database engines (created lazily, closed on shutdown)
        """
        configure_logging(settings.environment)
        probe.application_starting(settings.environment.value, __version__)

        bus_settings = get_message_bus_settings()
        consumer = None
        if bus_settings.enabled:
            consumer = build_initialization_consumer(
                redis=get_redis_client(),
                database_settings=get_database_settings(),
                bus_settings=bus_settings,
            )
            await consumer.start()
            probe.initialization_consumer_started(
                consumer.stream, bus_settings.consumer_group
            )
        else:
            probe.message_bus_disabled()

        try:
            yield
        finally:
            try:
                if consumer is not None:
                    await consumer.stop()
            finally:
                await close_redis_client()
                await close_database_connections()
                probe.application_stopped()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant client, group and user assignment management",
        version=__version__,
        lifespan=client_management_lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    if explicit_settings:
        app.dependency_overrides[get_settings] = lambda: settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_argument(request: Request, exc: RequestValidationError):
        # Malformed requests are InvalidArgument, not 422.
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    app.include_router(clients_router)

    @app.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
