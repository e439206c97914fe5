from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from souq_api.core.settings import settings
from souq_api.db.session import async_session, engine

from .api.routes import api_router
from .core.logging import configure_logging
from .observability.tracing import configure_tracing
from .services.ai.bootstrap import build_provider_registry
from .services.webhooks import SqlAlchemyWebhookRepository, WebhookDispatchService

APP_VERSION = "0.1.0"
SERVICE_NAME = "souq-api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = app.state.provider_registry
    logger.info(
        "AI providers ready",
        conversational=[descriptor.id for descriptor in registry.list_conversational_providers()],
        tts=[descriptor.id for descriptor in registry.list_tts_providers()],
    )
    try:
        yield
    finally:
        await engine.dispose()


def create_app() -> FastAPI:
    """Application factory for the ThriftySouq API service."""
    configure_logging(
        service_name=SERVICE_NAME,
        environment=settings.environment,
        version=APP_VERSION,
        level=settings.log_level,
    )

    app = FastAPI(
        title="ThriftySouq API",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if settings.tracing_enabled:
        configure_tracing(
            app,
            service_name=SERVICE_NAME,
            service_version=APP_VERSION,
            environment=settings.environment,
        )

    app.state.provider_registry = build_provider_registry(settings)
    app.state.webhook_service = WebhookDispatchService(SqlAlchemyWebhookRepository(async_session))

    app.include_router(api_router)

    @app.get("/healthz", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {
            "status": "ok",
            "environment": settings.environment,
            "version": APP_VERSION,
        }

    return app
