"""Main library client composing the caches, collaborators and token registry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from dexfacts.cache.ttl import TTLCache
from dexfacts.clients.api import MetadataApi
from dexfacts.clients.ledger import LedgerClient
from dexfacts.clock import SYSTEM_CLOCK, Clock
from dexfacts.config import DexfactsSettings
from dexfacts.core.constants import EPOCH_INFO_TTL_MS
from dexfacts.core.models import EpochInfo, PoolConfig, TokenRecord
from dexfacts.retry import retry_bounded, retry_forever
from dexfacts.tokens.registry import ProvenanceGroups, TokenRegistry

logger = logging.getLogger(__name__)


class DexfactsClient:
    """
    Client-facing facade for pool and token facts.

    Owns the external token-list cache (TTL from settings), the epoch-info
    cache (fixed 30 seconds) and the token registry. Each instance has its own
    caches, so several clients never share state.

    Usage:
        async with DexfactsClient() as client:
            token = await client.resolve("So11111111111111111111111111111111111111112")
            epoch = await client.epoch_info()

    Collaborators may be injected; injected ones are not closed by ``close()``.
    """

    def __init__(
        self,
        settings: DexfactsSettings | None = None,
        *,
        api: MetadataApi | None = None,
        ledger: LedgerClient | None = None,
        clock: Clock | None = None,
        extra_tokens: Iterable[TokenRecord] | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
            api: Metadata API collaborator (built from settings if omitted)
            ledger: Ledger collaborator (built from settings if omitted)
            clock: Time source for caches and retries
            extra_tokens: Curated token list merged last on every load
        """
        self._settings = settings or DexfactsSettings()
        self._clock = clock or SYSTEM_CLOCK

        self._owns_api = api is None
        self._owns_ledger = ledger is None
        self.api = api or MetadataApi.from_settings(self._settings)
        self.ledger = ledger or LedgerClient.from_settings(self._settings)

        self._token_list_cache: TTLCache[list[TokenRecord]] = TTLCache(
            "external token list", self._settings.token_list_ttl_ms, clock=self._clock
        )
        self._epoch_cache: TTLCache[EpochInfo] = TTLCache(
            "epoch info", EPOCH_INFO_TTL_MS, clock=self._clock
        )
        self.registry = TokenRegistry(self.api, self.ledger, extra_tokens=extra_tokens)
        self._load_lock = asyncio.Lock()

    @classmethod
    async def open(
        cls,
        settings: DexfactsSettings | None = None,
        **kwargs: Any,
    ) -> DexfactsClient:
        """Create a client and, unless disabled in settings, load the token table."""
        client = cls(settings, **kwargs)
        if client.settings.load_tokens:
            await client.load()
        return client

    async def __aenter__(self) -> DexfactsClient:
        """Load the token table on context entry."""
        if self._settings.load_tokens and self.registry.generation == 0:
            await self.load()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def close(self) -> None:
        """Close collaborators created by this client."""
        if self._owns_api:
            await self.api.close()
        if self._owns_ledger:
            await self.ledger.close()

    @property
    def settings(self) -> DexfactsSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self, force_refresh: bool = False, *, max_attempts: int | None = None) -> None:
        """
        Fetch the external token list (through its cache) and rebuild the table.

        Concurrent loads are serialized so an older fetch never replaces a
        newer table.

        Args:
            force_refresh: Bypass the token-list cache
            max_attempts: Bound on fetch attempts; defaults to
                ``settings.token_list_max_attempts`` (unset retries forever)
        """
        async with self._load_lock:
            external = await self.fetch_external_token_list(
                force_refresh, max_attempts=max_attempts
            )
            self.registry.load(external)

    async def fetch_external_token_list(
        self,
        force_refresh: bool = False,
        *,
        max_attempts: int | None = None,
    ) -> list[TokenRecord]:
        """External token list, refetched once its TTL has elapsed."""
        return await self._token_list_cache.get(
            lambda: self._fetch_external_token_list(max_attempts),
            force_refresh=force_refresh,
        )

    async def _fetch_external_token_list(self, max_attempts: int | None = None) -> list[TokenRecord]:
        name = "external token list"
        interval = self._settings.retry_interval_ms
        if max_attempts is None:
            max_attempts = self._settings.token_list_max_attempts

        if max_attempts is None:
            return await retry_forever(
                name, self.api.get_external_token_list, interval, clock=self._clock
            )
        return await retry_bounded(
            name, self.api.get_external_token_list, max_attempts, interval, clock=self._clock
        )

    # ------------------------------------------------------------------
    # Ledger and API reads
    # ------------------------------------------------------------------

    async def epoch_info(self) -> EpochInfo:
        """Current epoch info, cached for 30 seconds."""
        return await self._epoch_cache.get(self.ledger.get_epoch_info)

    async def get_configs(self) -> list[PoolConfig]:
        return await self.api.get_configs()

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    @property
    def token_map(self) -> Mapping[str, TokenRecord]:
        return self.registry.token_map

    @property
    def token_list(self) -> list[TokenRecord]:
        return self.registry.token_list

    @property
    def mint_group(self) -> ProvenanceGroups:
        return self.registry.mint_group

    def set_extra_tokens(self, tokens: Iterable[TokenRecord]) -> None:
        """Replace the curated token list; applied on the next ``load``."""
        self.registry.set_extra_tokens(tokens)

    async def resolve(self, address: str) -> TokenRecord:
        """Resolve a mint address through the table, the API, then the ledger."""
        return await self.registry.resolve(address)
