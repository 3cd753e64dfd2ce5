"""Shared test fixtures for all tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from dexfacts.config import DexfactsSettings
from dexfacts.core.constants import TOKEN_PROGRAM_ID
from dexfacts.core.models import AccountInfo, EpochInfo, TokenExtensions, TokenRecord
from dexfacts.layout.accounts import MINT_LAYOUT
from dexfacts.layout.codec import Base58Codec

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"


# ============================================================================
# Helpers
# ============================================================================


class FakeClock:
    """Deterministic clock; ``sleep`` advances time instead of waiting."""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now = start_ms
        self.sleeps: list[float] = []

    def now_ms(self) -> int:
        return self.now

    async def sleep(self, millis: float) -> None:
        self.sleeps.append(millis)
        self.now += int(millis)

    def advance(self, millis: int) -> None:
        self.now += millis


def address_from_seed(seed: int) -> str:
    """A valid base-58 account address derived from one repeated byte."""
    return Base58Codec().to_string(bytes([seed]) * 32)


def make_mint_data(decimals: int, supply: int = 1_000_000, trailing: bytes = b"") -> bytes:
    """Raw bytes of an initialized mint account without authorities."""
    return MINT_LAYOUT.encode(
        {
            "mint_authority_option": 0,
            "mint_authority": bytes(32),
            "supply": supply,
            "decimals": decimals,
            "is_initialized": True,
            "freeze_authority_option": 0,
            "freeze_authority": bytes(32),
        }
    ) + trailing


def make_token(address: str, symbol: str = "TKN", **kwargs) -> TokenRecord:
    """Build a token record with sensible defaults."""
    values = {"address": address, "symbol": symbol, "name": f"{symbol} Token", "decimals": 6}
    values.update(kwargs)
    return TokenRecord(**values)


# ============================================================================
# Clock and Settings Fixtures
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> DexfactsSettings:
    """Settings pointing at test hosts; no environment or .env influence on values used."""
    return DexfactsSettings(
        _env_file=None,
        rpc_url="https://rpc.test",
        api_base_url="https://api.test",
        token_list_url="https://tokens.test/list",
        token_list_ttl_ms=5 * 60 * 1000,
        retry_interval_ms=1000,
        api_timeout=5.0,
    )


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def usdc_token() -> TokenRecord:
    return TokenRecord(
        chain_id=101,
        address=USDC_MINT,
        program_id=TOKEN_PROGRAM_ID,
        logo_uri="https://example.com/usdc.png",
        symbol="USDC",
        name="USD Coin",
        decimals=6,
        tags=frozenset({"stablecoin"}),
        extensions=TokenExtensions(coingecko_id="usd-coin"),
    )


@pytest.fixture
def bonk_token() -> TokenRecord:
    return make_token(BONK_MINT, "BONK", decimals=5, tags=frozenset({"community"}))


@pytest.fixture
def external_list(usdc_token: TokenRecord, bonk_token: TokenRecord) -> list[TokenRecord]:
    return [usdc_token, bonk_token]


@pytest.fixture
def epoch_info() -> EpochInfo:
    return EpochInfo(
        absolute_slot=250_000_000,
        block_height=230_000_000,
        epoch=580,
        slot_index=123_456,
        slots_in_epoch=432_000,
        transaction_count=None,
    )


@pytest.fixture
def mint_account() -> AccountInfo:
    return AccountInfo(owner=TOKEN_PROGRAM_ID, lamports=1_461_600, data=make_mint_data(decimals=8))


# ============================================================================
# Collaborator Fakes
# ============================================================================


@pytest.fixture
def mock_api(external_list: list[TokenRecord]) -> AsyncMock:
    """Metadata API fake: returns the external list and knows no single tokens."""
    api = AsyncMock()
    api.get_external_token_list.return_value = external_list
    api.get_token_info.return_value = []
    api.get_configs.return_value = []
    return api


@pytest.fixture
def mock_ledger(epoch_info: EpochInfo) -> AsyncMock:
    """Ledger fake: no accounts exist."""
    ledger = AsyncMock()
    ledger.get_account_info.return_value = None
    ledger.get_epoch_info.return_value = epoch_info
    return ledger


# ============================================================================
# Factory Fixtures
# ============================================================================


@pytest.fixture
def token_factory():
    """Factory fixture building token records."""
    return make_token


@pytest.fixture
def address_factory():
    """Factory fixture deriving valid addresses from a byte seed."""
    return address_from_seed


@pytest.fixture
def mint_data_factory():
    """Factory fixture building raw mint account bytes."""
    return make_mint_data
