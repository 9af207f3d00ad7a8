"""FastAPI application entry point with lifespan management."""

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.health import router as health_router
from src.api.middleware import RequestContextMiddleware
from src.api.tax import router as tax_router
from src.core.config import settings
from src.core.logging import configure_logging, get_logger
from src.tax.year_config import get_tax_year_config

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Startup:
        - Configure structured logging
        - Resolve the configured tax year's constants (fails fast if missing)
    """
    configure_logging()
    logger.info(
        "Starting application",
        environment=settings.environment,
        tax_year=settings.tax_year,
    )

    get_tax_year_config(settings.tax_year)

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title="Federal Tax Engine",
    description="Federal income tax, credits and refund computation",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware for the client-facing application
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request context middleware
app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health_router)
app.include_router(tax_router)
