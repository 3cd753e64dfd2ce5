"""Token table endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from dexfacts.api.dependencies import Client
from dexfacts.api.schemas import (
    ProvenanceAddressesResponse,
    ProvenanceGroupsResponse,
    ReloadResponse,
    TokenListResponse,
    TokenResponse,
)
from dexfacts.tokens.registry import ProvenanceGroups

router = APIRouter(prefix="/tokens", tags=["tokens"])


def _group_sizes(groups: ProvenanceGroups) -> ProvenanceGroupsResponse:
    return ProvenanceGroupsResponse(
        official=len(groups.official),
        external=len(groups.external),
        curated=len(groups.curated),
    )


@router.get(
    "",
    response_model=TokenListResponse,
    response_model_by_alias=True,
    operation_id="listTokens",
    summary="List merged tokens",
)
async def list_tokens(client: Client) -> TokenListResponse:
    """Return the current merged token table."""
    groups = client.mint_group
    tokens = [
        TokenResponse.from_record(record, groups.of(record.address))
        for record in client.token_list
    ]
    return TokenListResponse(total=len(tokens), groups=_group_sizes(groups), tokens=tokens)


@router.get(
    "/groups",
    response_model=ProvenanceAddressesResponse,
    operation_id="getTokenGroups",
    summary="Addresses per provenance group",
)
async def token_groups(client: Client) -> ProvenanceAddressesResponse:
    groups = client.mint_group
    return ProvenanceAddressesResponse(
        official=sorted(groups.official),
        external=sorted(groups.external),
        curated=sorted(groups.curated),
    )


@router.post(
    "/reload",
    response_model=ReloadResponse,
    operation_id="reloadTokens",
    summary="Reload the token table",
    description=(
        "Rebuild the token table. The external list fetch is retried at most "
        "``reload_max_attempts`` times; exhausting them returns 502."
    ),
)
async def reload_tokens(
    client: Client,
    force: bool = Query(default=False, description="Bypass the token-list cache"),
) -> ReloadResponse:
    await client.load(force_refresh=force, max_attempts=client.settings.reload_max_attempts)
    return ReloadResponse(total=len(client.token_map), groups=_group_sizes(client.mint_group))


@router.get(
    "/{address}",
    response_model=TokenResponse,
    response_model_by_alias=True,
    operation_id="resolveToken",
    summary="Resolve a token",
    description="Look up a mint in the table, falling back to the metadata API and the ledger.",
)
async def resolve_token(address: str, client: Client) -> TokenResponse:
    record = await client.resolve(address)
    return TokenResponse.from_record(record, client.mint_group.of(record.address))
