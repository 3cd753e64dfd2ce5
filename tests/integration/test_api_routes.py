"""Integration tests for API routes."""

from __future__ import annotations

import pytest
import respx
from httpx import ASGITransport, AsyncClient, Response

from dexfacts.api.app import create_app
from dexfacts.client import DexfactsClient
from dexfacts.core.constants import NATIVE_MINT
from dexfacts.core.exceptions import UpstreamUnavailableError

pytestmark = [pytest.mark.integration]

USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


# ============================================================================
# Health Check Tests
# ============================================================================


class TestHealthEndpoint:
    """Tests for the /api/v1/health endpoint."""

    async def test_healthy(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"] == {"tokens": "up", "ledger": "up"}
        assert isinstance(data["version"], str)

    async def test_degraded_when_ledger_down(self, test_client: AsyncClient, mock_ledger):
        mock_ledger.get_epoch_info.side_effect = UpstreamUnavailableError("down", source="ledger")

        response = await test_client.get("/api/v1/health")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["services"]["ledger"] == "down"

    async def test_unhealthy_without_client(self, settings):
        app = create_app(settings)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/health")
            ready = await client.get("/api/v1/ready")

        assert response.json()["status"] == "unhealthy"
        assert ready.json() == {"ready": False}


class TestReadinessEndpoint:
    """Tests for the /api/v1/ready endpoint."""

    async def test_ready_after_load(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/ready")

        assert response.status_code == 200
        assert response.json() == {"ready": True}


# ============================================================================
# Token Endpoint Tests
# ============================================================================


class TestListTokens:
    """Tests for GET /api/v1/tokens."""

    async def test_lists_merged_table(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/tokens")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["groups"] == {"official": 1, "external": 2, "curated": 0}

        by_address = {t["address"]: t for t in data["tokens"]}
        assert by_address[NATIVE_MINT]["provenance"] == ["official"]
        usdc = by_address[USDC]
        assert usdc["programId"] == "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
        assert usdc["logoUri"] == "https://example.com/usdc.png"
        assert usdc["type"] == "external"
        assert usdc["extensions"] == {"coingeckoId": "usd-coin"}

    async def test_groups(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/tokens/groups")

        data = response.json()
        assert data["official"] == [NATIVE_MINT]
        assert USDC in data["external"]
        assert data["curated"] == []


class TestResolveToken:
    """Tests for GET /api/v1/tokens/{address}."""

    async def test_table_hit(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/tokens/{USDC}")

        assert response.status_code == 200
        assert response.json()["symbol"] == "USDC"

    async def test_native_alias(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/tokens/sol")

        assert response.status_code == 200
        assert response.json()["address"] == NATIVE_MINT

    async def test_ledger_fallback(
        self, test_client: AsyncClient, mock_ledger, mint_account, address_factory
    ):
        address = address_factory(21)
        mock_ledger.get_account_info.return_value = mint_account

        response = await test_client.get(f"/api/v1/tokens/{address}")

        assert response.status_code == 200
        data = response.json()
        assert data["decimals"] == 8
        assert data["type"] == "unknown"
        assert data["provenance"] == ["curated"]

    async def test_unknown_mint_returns_404(self, test_client: AsyncClient, address_factory):
        response = await test_client.get(f"/api/v1/tokens/{address_factory(22)}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "unknown_mint"


class TestReloadTokens:
    """Tests for POST /api/v1/tokens/reload."""

    async def test_reload_uses_cache(self, test_client: AsyncClient, mock_api):
        response = await test_client.post("/api/v1/tokens/reload")

        assert response.status_code == 200
        assert response.json()["total"] == 3
        mock_api.get_external_token_list.assert_awaited_once()

    async def test_forced_reload(self, test_client: AsyncClient, mock_api):
        response = await test_client.post("/api/v1/tokens/reload", params={"force": "true"})

        assert response.status_code == 200
        assert mock_api.get_external_token_list.await_count == 2

    async def test_reload_gives_up_when_upstream_down(self, test_client: AsyncClient, mock_api):
        mock_api.get_external_token_list.side_effect = ConnectionError("down")

        response = await test_client.post("/api/v1/tokens/reload", params={"force": "true"})

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "upstream_unavailable"
        # One load during setup plus the bounded reload attempts
        assert mock_api.get_external_token_list.await_count == 1 + 3

        listing = await test_client.get("/api/v1/tokens")
        assert listing.json()["total"] == 3


# ============================================================================
# Chain Endpoint Tests
# ============================================================================


class TestEpochEndpoint:
    """Tests for GET /api/v1/chain/epoch."""

    async def test_epoch_info(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/chain/epoch")

        assert response.status_code == 200
        data = response.json()
        assert data["epoch"] == 580
        assert data["slotsInEpoch"] == 432_000

    async def test_upstream_error_returns_502(self, test_client: AsyncClient, mock_ledger):
        mock_ledger.get_epoch_info.side_effect = UpstreamUnavailableError("down", source="ledger")

        response = await test_client.get("/api/v1/chain/epoch")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "upstream_unavailable"

    async def test_non_json_ledger_body_returns_502(self, settings, mock_api, fake_clock):
        client = DexfactsClient(settings, api=mock_api, clock=fake_clock)
        app = create_app(settings)
        app.state.client = client

        with respx.mock:
            respx.post("https://rpc.test/").mock(
                return_value=Response(200, text="<html>bad gateway</html>")
            )
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
                response = await http.get("/api/v1/chain/epoch")
        await client.close()

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "upstream_unavailable"
