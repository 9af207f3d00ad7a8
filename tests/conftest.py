"""Pytest configuration and shared fixtures for tests."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.tax.year_config import TAX_YEAR_2025, TaxYearConfig


@pytest.fixture
def config() -> TaxYearConfig:
    """Tax year 2025 constants.

    Returns:
        The shipped TaxYearConfig for 2025.
    """
    return TAX_YEAR_2025


@pytest_asyncio.fixture
async def api_client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async client bound to the FastAPI app.

    Returns:
        httpx AsyncClient using the ASGI transport.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
