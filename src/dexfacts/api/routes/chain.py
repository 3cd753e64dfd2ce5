"""Ledger state endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from dexfacts.api.dependencies import Client
from dexfacts.api.schemas import EpochInfoResponse

router = APIRouter(prefix="/chain", tags=["chain"])


@router.get(
    "/epoch",
    response_model=EpochInfoResponse,
    operation_id="getEpochInfo",
    summary="Current epoch info",
)
async def epoch_info(client: Client) -> EpochInfoResponse:
    info = await client.epoch_info()
    return EpochInfoResponse.model_validate(info, from_attributes=True)
