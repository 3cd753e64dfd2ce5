"""Client for the DEX metadata API and the bulk external token list."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dexfacts.clients.base import HttpCollaborator
from dexfacts.core.exceptions import UpstreamUnavailableError
from dexfacts.core.models import PoolConfig, TokenRecord

if TYPE_CHECKING:
    from dexfacts.config import DexfactsSettings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class MetadataApi(HttpCollaborator):
    """
    Metadata API client.

    Endpoints under ``base_url`` wrap their payload in a ``{"data": ...}``
    envelope; the external token list is a bare JSON array at an absolute URL.
    """

    SOURCE_NAME: ClassVar[str] = "metadata_api"

    def __init__(
        self,
        base_url: str = "https://amm-api.goose-fx.io",
        timeout: float = 10.0,
        *,
        mint_info_path: str = "/mint/ids",
        config_path: str = "/main/config",
        token_list_url: str = "https://tokens.jup.ag/tokens?tags=lst,community",
        log_requests: bool = False,
        log_count: int = 1000,
    ) -> None:
        super().__init__(base_url, timeout, log_requests=log_requests, log_count=log_count)
        self.mint_info_path = mint_info_path
        self.config_path = config_path
        self.token_list_url = token_list_url

    @classmethod
    def from_settings(cls, settings: DexfactsSettings) -> MetadataApi:
        return cls(
            settings.api_base_url,
            settings.api_timeout,
            mint_info_path=settings.mint_info_path,
            config_path=settings.config_path,
            token_list_url=settings.token_list_url,
            log_requests=settings.log_requests,
            log_count=settings.log_count,
        )

    async def get_token_info(self, addresses: Sequence[str]) -> list[TokenRecord]:
        """
        Fetch metadata for a batch of mint addresses.

        The order of the returned records is not guaranteed to match the input.
        Unknown addresses are simply absent from the result.
        """
        if not addresses:
            return []

        response = await self._make_request(
            "GET",
            self.mint_info_path,
            params={"mints": ",".join(str(a) for a in addresses)},
        )
        return self._parse_list(self._unwrap(self._parse_json(response)), TokenRecord)

    async def get_external_token_list(self) -> list[TokenRecord]:
        """Fetch the bulk external token list."""
        response = await self._make_request("GET", self.token_list_url)
        return self._parse_list(self._unwrap(self._parse_json(response)), TokenRecord)

    async def get_configs(self) -> list[PoolConfig]:
        """Fetch the pool-configuration entries."""
        response = await self._make_request("GET", self.config_path)
        return self._parse_list(self._unwrap(self._parse_json(response)), PoolConfig)

    @staticmethod
    def _unwrap(body: Any) -> Any:
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    def _parse_list(self, items: Any, model: type[ModelT]) -> list[ModelT]:
        """Validate a JSON array, dropping null and malformed entries."""
        if not isinstance(items, list):
            raise UpstreamUnavailableError(
                message=f"Expected a JSON array, got {type(items).__name__}",
                source=self.SOURCE_NAME,
            )

        parsed: list[ModelT] = []
        for item in items:
            if item is None:
                continue
            try:
                parsed.append(model.model_validate(item))
            except PydanticValidationError as e:
                logger.warning(f"Skipping malformed {model.__name__} entry: {e.error_count()} errors")
        return parsed
