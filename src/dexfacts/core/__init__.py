"""Core types, models, and exceptions."""

from .exceptions import (
    DexfactsError,
    EmptyInputError,
    LayoutError,
    LengthMismatchError,
    ResolutionError,
    RpcError,
    SchemaError,
    UnknownMintError,
    UpstreamFetchError,
    UpstreamUnavailableError,
    ValidationError,
)
from .models import (
    AccountInfo,
    EpochInfo,
    PoolConfig,
    TokenExtensions,
    TokenRecord,
    TransferFee,
    TransferFeeConfig,
)
from .types import Cluster, Commitment, Provenance, TokenType

__all__ = [
    # Types
    "Cluster",
    "Commitment",
    "Provenance",
    "TokenType",
    # Models
    "AccountInfo",
    "EpochInfo",
    "PoolConfig",
    "TokenExtensions",
    "TokenRecord",
    "TransferFee",
    "TransferFeeConfig",
    # Exceptions
    "DexfactsError",
    "EmptyInputError",
    "LayoutError",
    "LengthMismatchError",
    "ResolutionError",
    "RpcError",
    "SchemaError",
    "UnknownMintError",
    "UpstreamFetchError",
    "UpstreamUnavailableError",
    "ValidationError",
]
