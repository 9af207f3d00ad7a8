"""API module exports."""

from src.api.health import router as health_router
from src.api.tax import router as tax_router

__all__ = [
    "health_router",
    "tax_router",
]
