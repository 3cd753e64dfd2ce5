"""Shared HTTP plumbing and collaborator interfaces."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol

import httpx

from dexfacts.core.exceptions import UpstreamUnavailableError
from dexfacts.core.models import AccountInfo, EpochInfo, TokenRecord

logger = logging.getLogger(__name__)


class MetadataSource(Protocol):
    """Metadata API as seen by the token registry."""

    async def get_token_info(self, addresses: Sequence[str]) -> list[TokenRecord]: ...

    async def get_external_token_list(self) -> list[TokenRecord]: ...


class LedgerSource(Protocol):
    """Ledger reads needed by the registry and the facade."""

    async def get_account_info(self, address: str) -> AccountInfo | None: ...

    async def get_epoch_info(self) -> EpochInfo: ...


@dataclass(frozen=True)
class RequestLogEntry:
    """One completed (or failed) HTTP request."""

    status: int | None
    url: str
    params: dict[str, Any] | None
    data: Any


class HttpCollaborator:
    """
    Base class for remote collaborators.

    Provides:
    - Lazily created ``httpx.AsyncClient`` with base URL, timeout and headers
    - Request/response logging and an optional bounded request history
    - Translation of transport errors and error statuses to UpstreamUnavailableError
    """

    SOURCE_NAME: ClassVar[str]

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        log_requests: bool = False,
        log_count: int = 1000,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None
        self._log_requests = log_requests
        self._history: deque[RequestLogEntry] = deque(maxlen=log_count)

    @property
    def request_history(self) -> list[RequestLogEntry]:
        """Recent requests, oldest first (empty unless request logging is on)."""
        return list(self._history)

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=self._get_default_headers(),
                follow_redirects=True,
                event_hooks={"request": [self._on_request]},
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            logger.error(f"{self.SOURCE_NAME} request failed: {e}")
            raise UpstreamUnavailableError(
                message=f"HTTP error: {e}",
                source=self.SOURCE_NAME,
            ) from e

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": "dexfacts/0.1",
            "Accept": "application/json",
        }

    async def _on_request(self, request: httpx.Request) -> None:
        logger.debug(f"{request.method} {request.url}")

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make an HTTP request, raising on transport errors and non-2xx statuses."""
        params = kwargs.get("params")
        try:
            async with self._get_client() as client:
                response = await client.request(method, url, **kwargs)
        except UpstreamUnavailableError as e:
            self._record(None, url, params, e.message)
            raise

        full_url = str(response.request.url)
        if response.is_error:
            logger.error(f"{method.upper()} {full_url} {response.status_code}")
            self._record(response.status_code, full_url, params, response.text)
            raise UpstreamUnavailableError(
                message=f"{method.upper()} {full_url} returned {response.status_code}",
                source=self.SOURCE_NAME,
                status_code=response.status_code,
            )

        logger.debug(f"{method.upper()} {full_url} {response.status_code}")
        self._record(response.status_code, full_url, params, response.text)
        return response

    def _parse_json(self, response: httpx.Response) -> Any:
        """Decode a JSON body, treating an undecodable body as an upstream failure."""
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailableError(
                message=f"Response from {response.request.url} is not valid JSON: {e}",
                source=self.SOURCE_NAME,
                status_code=response.status_code,
            ) from e

    def _record(self, status: int | None, url: str, params: Any, data: Any) -> None:
        if self._log_requests:
            self._history.append(
                RequestLogEntry(status=status, url=url, params=params, data=data)
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> HttpCollaborator:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
