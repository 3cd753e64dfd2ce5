"""Core enums and type definitions."""

from enum import StrEnum


class Cluster(StrEnum):
    """Ledger networks the client can target."""

    MAINNET = "mainnet"
    DEVNET = "devnet"


class Provenance(StrEnum):
    """Source groups that contribute token records."""

    OFFICIAL = "official"
    EXTERNAL = "external"
    CURATED = "curated"


class TokenType(StrEnum):
    """How a token record entered the table."""

    OFFICIAL = "official"
    EXTERNAL = "external"
    CURATED = "curated"
    UNKNOWN = "unknown"  # Synthesized from raw ledger bytes


class Commitment(StrEnum):
    """Ledger commitment levels accepted by the RPC endpoint."""

    PROCESSED = "processed"
    CONFIRMED = "confirmed"
    FINALIZED = "finalized"
