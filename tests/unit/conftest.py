"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

from typing import Any

import pytest
import respx
from httpx import Response

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Mock Response Helpers
# ============================================================================


def mock_json_response(data: Any, status_code: int = 200) -> Response:
    """Create a mock JSON response."""
    return Response(
        status_code=status_code,
        json=data,
        headers={"Content-Type": "application/json"},
    )


def rpc_result(result: Any, request_id: int = 1) -> Response:
    """Create a JSON-RPC success response."""
    return mock_json_response({"jsonrpc": "2.0", "id": request_id, "result": result})


def rpc_error(code: int, message: str, request_id: int = 1) -> Response:
    """Create a JSON-RPC error response."""
    return mock_json_response(
        {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}
    )


# ============================================================================
# API Payload Fixtures
# ============================================================================


@pytest.fixture
def external_token_payload() -> list[dict[str, Any]]:
    """Sample bulk token list payload (camelCase, as served upstream)."""
    return [
        {
            "address": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
            "name": "USD Coin",
            "symbol": "USDC",
            "decimals": 6,
            "logoURI": "https://example.com/usdc.png",
            "tags": ["verified", "community"],
            "extensions": {"coingeckoId": "usd-coin"},
            "daily_volume": 123456789.5,
        },
        {
            "address": "2b1kV6DkPAnxd5ixfnxCpjxmKwqjjaYmCZfHsFu24GXo",
            "name": "PayPal USD",
            "symbol": "PYUSD",
            "decimals": 6,
            "logoURI": None,
            "tags": ["token-2022"],
            "extensions": {
                "feeConfig": {
                    "transferFeeConfigAuthority": "Auth111",
                    "withdrawWithheldAuthority": "Auth222",
                    "withheldAmount": "0",
                    "olderTransferFee": {
                        "epoch": 500,
                        "maximumFee": "0",
                        "transferFeeBasisPoints": 0,
                    },
                    "newerTransferFee": {
                        "epoch": "600",
                        "maximumFee": "1000000",
                        "transferFeeBasisPoints": 25,
                    },
                },
                "website": "https://example.com",
            },
        },
    ]


@pytest.fixture
def mint_info_payload() -> dict[str, Any]:
    """Sample batched token-info payload wrapped in the API envelope."""
    return {
        "id": "req-1",
        "success": True,
        "data": [
            {
                "chainId": 101,
                "address": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
                "programId": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
                "logoURI": "https://example.com/bonk.png",
                "symbol": "Bonk",
                "name": "Bonk",
                "decimals": 5,
                "tags": [],
                "extensions": {},
            },
            None,
        ],
    }


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating mock responses."""
    return {
        "json": mock_json_response,
        "rpc_result": rpc_result,
        "rpc_error": rpc_error,
    }
