"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dexfacts.core.constants import DEFAULT_RPC_URLS
from dexfacts.core.types import Cluster, Commitment


class DexfactsSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DEXFACTS_",
    )

    # Ledger
    cluster: Cluster = Field(
        default=Cluster.MAINNET,
        description="Ledger network (selects the default RPC endpoint)",
    )
    rpc_url: str | None = Field(
        default=None,
        description="Ledger JSON-RPC URL (defaults to the cluster's public endpoint)",
    )
    commitment: Commitment = Field(
        default=Commitment.CONFIRMED,
        description="Commitment level for ledger reads",
    )

    # Metadata API
    api_base_url: str = Field(
        default="https://amm-api.goose-fx.io",
        description="Metadata API host",
    )
    mint_info_path: str = Field(
        default="/mint/ids",
        description="Path of the batched token-info endpoint",
    )
    config_path: str = Field(
        default="/main/config",
        description="Path of the pool-configuration endpoint",
    )
    token_list_url: str = Field(
        default="https://tokens.jup.ag/tokens?tags=lst,community",
        description="Absolute URL of the bulk external token list",
    )
    api_timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout in seconds for API and RPC calls",
    )

    # Token list caching and retry
    token_list_ttl_ms: int = Field(
        default=5 * 60 * 1000,
        ge=-1,
        description="External token-list TTL in ms (-1 never refetch, 0 always refetch)",
    )
    retry_interval_ms: int = Field(
        default=1000,
        ge=0,
        description="Delay between external token-list fetch attempts",
    )
    token_list_max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Bound on token-list fetch attempts (unset retries forever)",
    )
    reload_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Bound on token-list fetch attempts for reloads requested over HTTP",
    )
    load_tokens: bool = Field(
        default=True,
        description="Load the token table when a client is opened",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_requests: bool = Field(
        default=False,
        description="Keep an in-memory history of HTTP requests",
    )
    log_count: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of entries kept in the request history",
    )

    @property
    def resolved_rpc_url(self) -> str:
        """RPC URL to use, falling back to the cluster default."""
        return self.rpc_url or DEFAULT_RPC_URLS[self.cluster]


@lru_cache
def get_settings() -> DexfactsSettings:
    """Get cached settings instance."""
    return DexfactsSettings()
