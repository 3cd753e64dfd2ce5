"""Integration test fixtures for the HTTP surface."""

from __future__ import annotations

from typing import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from dexfacts.api.app import create_app
from dexfacts.client import DexfactsClient


# ============================================================================
# Facade Fixtures
# ============================================================================


@pytest.fixture
async def dexfacts_client(settings, mock_api, mock_ledger, fake_clock) -> DexfactsClient:
    """Facade over fake collaborators with the token table loaded."""
    client = DexfactsClient(settings, api=mock_api, ledger=mock_ledger, clock=fake_clock)
    await client.load()
    return client


# ============================================================================
# FastAPI Test Client Fixtures
# ============================================================================


@pytest.fixture
def test_app(settings, dexfacts_client: DexfactsClient):
    """Create the FastAPI application with a preloaded client in app state.

    ASGITransport does not run the lifespan, so the client is attached directly.
    """
    app = create_app(settings)
    app.state.client = dexfacts_client
    return app


@pytest.fixture
async def test_client(test_app) -> AsyncIterator[AsyncClient]:
    """Create async HTTP test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
