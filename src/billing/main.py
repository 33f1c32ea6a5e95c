from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.billing.api.middlewares import setup_middlewares
from src.billing.api.routes.router import api_router
from src.billing.core.config import get_settings
from src.billing.core.db import dispose_engine
from src.billing.core.exceptions import setup_exception_handlers
from src.billing.core.health import setup_health_endpoint, setup_metrics
from src.billing.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Login, registration and token management"},
    {"name": "integrations", "description": "Per-tenant integration tokens"},
    {"name": "tenants", "description": "Tenant administration"},
    {"name": "customers", "description": "Customers billed by a tenant"},
    {"name": "charges", "description": "Charges and payment status"},
    {"name": "messages", "description": "Payment reminder log"},
    {"name": "dashboard", "description": "Monthly billing figures"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant billing and collections API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
