"""Dexfacts - on-chain pool layouts and multi-source token resolution."""

from dexfacts.cache import CachedValue, TTLCache, get_or_fetch
from dexfacts.client import DexfactsClient
from dexfacts.config import DexfactsSettings
from dexfacts.core.exceptions import (
    DexfactsError,
    EmptyInputError,
    LengthMismatchError,
    UnknownMintError,
    UpstreamFetchError,
)
from dexfacts.core.models import EpochInfo, TokenExtensions, TokenRecord
from dexfacts.core.types import Provenance, TokenType
from dexfacts.layout import CPMM_CONFIG_LAYOUT, CPMM_POOL_LAYOUT, MINT_LAYOUT, Layout, decode, encode
from dexfacts.retry import retry_bounded, retry_forever
from dexfacts.tokens import ProvenanceGroups, TokenRegistry

__version__ = "0.1.0"
__all__ = [
    # Client
    "DexfactsClient",
    "DexfactsSettings",
    # Layouts
    "CPMM_CONFIG_LAYOUT",
    "CPMM_POOL_LAYOUT",
    "MINT_LAYOUT",
    "Layout",
    "decode",
    "encode",
    # Caching and retry
    "CachedValue",
    "TTLCache",
    "get_or_fetch",
    "retry_bounded",
    "retry_forever",
    # Tokens
    "EpochInfo",
    "Provenance",
    "ProvenanceGroups",
    "TokenExtensions",
    "TokenRecord",
    "TokenRegistry",
    "TokenType",
    # Errors
    "DexfactsError",
    "EmptyInputError",
    "LengthMismatchError",
    "UnknownMintError",
    "UpstreamFetchError",
    # Version
    "__version__",
]
