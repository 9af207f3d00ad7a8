"""Health check endpoint for infrastructure verification."""

from fastapi import APIRouter
from pydantic import BaseModel

from src.core.config import settings
from src.core.logging import get_logger
from src.tax.year_config import TAX_YEAR_CONFIGS

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    tax_year: int
    constants: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report whether constants for the configured tax year are loaded.

    Returns:
        HealthResponse, "degraded" when the configured year has no constants.
    """
    loaded = settings.tax_year in TAX_YEAR_CONFIGS
    if not loaded:
        logger.warning("tax_year_constants_missing", tax_year=settings.tax_year)

    return HealthResponse(
        status="ok" if loaded else "degraded",
        tax_year=settings.tax_year,
        constants="loaded" if loaded else "missing",
    )
