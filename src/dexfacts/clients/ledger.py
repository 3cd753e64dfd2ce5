"""Ledger JSON-RPC client."""

from __future__ import annotations

import base64
import binascii
import itertools
import logging
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError as PydanticValidationError

from dexfacts.clients.base import HttpCollaborator
from dexfacts.core.exceptions import RpcError
from dexfacts.core.models import AccountInfo, EpochInfo
from dexfacts.core.types import Commitment

if TYPE_CHECKING:
    from dexfacts.config import DexfactsSettings

logger = logging.getLogger(__name__)


class LedgerClient(HttpCollaborator):
    """Minimal async JSON-RPC client for account and epoch reads."""

    SOURCE_NAME: ClassVar[str] = "ledger"

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        *,
        commitment: Commitment = Commitment.CONFIRMED,
        log_requests: bool = False,
        log_count: int = 1000,
    ) -> None:
        super().__init__(rpc_url, timeout, log_requests=log_requests, log_count=log_count)
        self.commitment = commitment
        self._ids = itertools.count(1)

    @classmethod
    def from_settings(cls, settings: DexfactsSettings) -> LedgerClient:
        return cls(
            settings.resolved_rpc_url,
            settings.api_timeout,
            commitment=settings.commitment,
            log_requests=settings.log_requests,
            log_count=settings.log_count,
        )

    def _get_default_headers(self) -> dict[str, str]:
        headers = super()._get_default_headers()
        headers["Content-Type"] = "application/json"
        return headers

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Issue one JSON-RPC call and return its ``result``."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        response = await self._make_request("POST", "", json=payload)
        try:
            body = response.json()
        except ValueError as e:
            raise RpcError(f"{method} returned a body that is not JSON: {e}") from e
        if not isinstance(body, dict):
            raise RpcError(f"{method} returned a {type(body).__name__}, expected a JSON object")

        if error := body.get("error"):
            if not isinstance(error, dict):
                error = {"message": error}
            raise RpcError(
                f"{method} failed: {error.get('message', error)}",
                code=error.get("code"),
                details={"error": error},
            )
        if "result" not in body:
            raise RpcError(f"{method} returned no result")
        return body["result"]

    async def get_account_info(self, address: str) -> AccountInfo | None:
        """Fetch a raw account, or ``None`` when it does not exist."""
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": str(self.commitment)}],
        )
        value = result.get("value") if isinstance(result, dict) else None
        if not value:
            return None

        try:
            encoded, encoding = value["data"]
            if encoding != "base64":
                raise RpcError(f"Unexpected account encoding: {encoding}")
            data = base64.b64decode(encoded)
            return AccountInfo(
                owner=value["owner"],
                lamports=value.get("lamports", 0),
                data=data,
                executable=value.get("executable", False),
                rent_epoch=value.get("rentEpoch"),
            )
        except (KeyError, TypeError, ValueError, binascii.Error, PydanticValidationError) as e:
            raise RpcError(f"Malformed account payload for {address}: {e}") from e

    async def get_account_bytes(self, address: str) -> bytes | None:
        account = await self.get_account_info(address)
        return account.data if account else None

    async def get_epoch_info(self) -> EpochInfo:
        result = await self._call("getEpochInfo", [{"commitment": str(self.commitment)}])
        try:
            return EpochInfo.model_validate(result)
        except PydanticValidationError as e:
            raise RpcError(f"Malformed epoch info: {e.error_count()} errors") from e
