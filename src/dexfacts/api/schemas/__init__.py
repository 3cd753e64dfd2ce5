"""API request and response schemas."""

from dexfacts.api.schemas.base import APIBaseSchema, APIError, ErrorDetail
from dexfacts.api.schemas.responses import (
    EpochInfoResponse,
    HealthResponse,
    ProvenanceAddressesResponse,
    ProvenanceGroupsResponse,
    ReloadResponse,
    TokenListResponse,
    TokenResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    # Responses
    "EpochInfoResponse",
    "HealthResponse",
    "ProvenanceAddressesResponse",
    "ProvenanceGroupsResponse",
    "ReloadResponse",
    "TokenListResponse",
    "TokenResponse",
]
