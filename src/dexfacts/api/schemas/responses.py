"""Response schemas for API endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from dexfacts.api.schemas.base import APIBaseSchema
from dexfacts.core.models import TokenRecord
from dexfacts.core.types import Provenance, TokenType


class TokenResponse(APIBaseSchema):
    """Token metadata with its provenance."""

    chain_id: int
    address: str
    program_id: str
    logo_uri: str | None = None
    symbol: str
    name: str
    decimals: int
    tags: list[str] = Field(default_factory=list)
    priority: int
    type: TokenType | None = None
    extensions: dict[str, Any] = Field(default_factory=dict)
    provenance: list[Provenance] = Field(default_factory=list)

    @classmethod
    def from_record(
        cls,
        record: TokenRecord,
        provenance: set[Provenance] | None = None,
    ) -> TokenResponse:
        return cls(
            chain_id=record.chain_id,
            address=record.address,
            program_id=record.program_id,
            logo_uri=record.logo_uri,
            symbol=record.symbol,
            name=record.name,
            decimals=record.decimals,
            tags=sorted(record.tags),
            priority=record.priority,
            type=record.type,
            extensions=record.extensions.model_dump(by_alias=True, exclude_none=True),
            provenance=sorted(provenance or ()),
        )


class ProvenanceGroupsResponse(APIBaseSchema):
    """Sizes of the provenance groups."""

    official: int
    external: int
    curated: int


class TokenListResponse(APIBaseSchema):
    """The merged token table."""

    total: int
    groups: ProvenanceGroupsResponse
    tokens: list[TokenResponse]


class ProvenanceAddressesResponse(APIBaseSchema):
    """Addresses contributed by each source."""

    official: list[str]
    external: list[str]
    curated: list[str]


class ReloadResponse(APIBaseSchema):
    """Result of a table reload."""

    total: int
    groups: ProvenanceGroupsResponse


class EpochInfoResponse(APIBaseSchema):
    """Current ledger epoch position."""

    absolute_slot: int
    block_height: int | None = None
    epoch: int
    slot_index: int
    slots_in_epoch: int
    transaction_count: int | None = None


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]] = Field(default_factory=dict)
