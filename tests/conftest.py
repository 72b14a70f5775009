"""
Test Configuration and Fixtures

Provides the statutory constants table and an async API test client.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.main import app
from engines.schemas.statutory import StatutoryConstants
from engines.services.statutory_constants import get_statutory_constants


@pytest.fixture
def constants() -> StatutoryConstants:
    """The production statutory constants table."""
    return get_statutory_constants()


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async test client against the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
