"""Multi-source token table with on-demand fallback resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from dexfacts.clients.base import LedgerSource, MetadataSource
from dexfacts.core.constants import (
    MAINNET_CHAIN_ID,
    NATIVE_ALIAS,
    NATIVE_TOKEN,
    TOKEN_2022_PROGRAM_ID,
    TOKEN_2022_TAG,
    TOKEN_PROGRAM_ID,
)
from dexfacts.core.exceptions import EmptyInputError, LayoutError, UnknownMintError
from dexfacts.core.models import TokenRecord
from dexfacts.core.types import Provenance, TokenType
from dexfacts.layout.accounts import MINT_LAYOUT
from dexfacts.layout.codec import KeyCodec, is_valid_address

logger = logging.getLogger(__name__)

OFFICIAL_PRIORITY = 0
LISTED_PRIORITY = 1
API_PRIORITY = 2
LEDGER_PRIORITY = 0

UNKNOWN_SYMBOL_LENGTH = 6


@dataclass(frozen=True)
class ProvenanceGroups:
    """Addresses contributed by each source; an address may be in several groups."""

    official: frozenset[str] = frozenset()
    external: frozenset[str] = frozenset()
    curated: frozenset[str] = frozenset()

    def of(self, address: str) -> set[Provenance]:
        """Sources that contributed ``address``."""
        found = set()
        if address in self.official:
            found.add(Provenance.OFFICIAL)
        if address in self.external:
            found.add(Provenance.EXTERNAL)
        if address in self.curated:
            found.add(Provenance.CURATED)
        return found


@dataclass
class _Snapshot:
    """One load generation of the table and its provenance sets."""

    table: dict[str, TokenRecord] = field(default_factory=dict)
    official: set[str] = field(default_factory=set)
    external: set[str] = field(default_factory=set)
    curated: set[str] = field(default_factory=set)


def with_default_program(token: TokenRecord) -> TokenRecord:
    """Fill an empty program id from the token's tags."""
    if token.program_id:
        return token
    program_id = TOKEN_2022_PROGRAM_ID if TOKEN_2022_TAG in token.tags else TOKEN_PROGRAM_ID
    return token.model_copy(update={"program_id": program_id})


class TokenRegistry:
    """
    Address-keyed token table merged from three sources.

    ``load`` rebuilds the table from scratch in a fixed order, official entry,
    then the external list, then the curated list, so later sources overwrite
    earlier ones for the same address. The new table is published in a single
    assignment; readers never see a half-merged table.

    ``resolve`` looks an address up in the table, then asks the metadata API,
    then decodes the mint account from the ledger. Successful fallbacks are
    added to the current table under the curated group.
    """

    def __init__(
        self,
        api: MetadataSource,
        ledger: LedgerSource,
        *,
        extra_tokens: Iterable[TokenRecord] | None = None,
        codec: KeyCodec | None = None,
    ) -> None:
        self._api = api
        self._ledger = ledger
        self._codec = codec
        self._extra_tokens: list[TokenRecord] = list(extra_tokens or [])
        self._snapshot = _Snapshot()
        self._generation = 0

    @property
    def extra_tokens(self) -> list[TokenRecord]:
        return list(self._extra_tokens)

    def set_extra_tokens(self, tokens: Iterable[TokenRecord]) -> None:
        """Replace the curated list; takes effect on the next ``load``."""
        self._extra_tokens = list(tokens)

    @property
    def generation(self) -> int:
        """Number of completed loads."""
        return self._generation

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self, external_tokens: Iterable[TokenRecord]) -> None:
        """Rebuild the table from the native entry, ``external_tokens`` and the curated list."""
        snapshot = _Snapshot()

        snapshot.table[NATIVE_TOKEN.address] = NATIVE_TOKEN
        snapshot.official.add(NATIVE_TOKEN.address)

        for token in external_tokens:
            snapshot.table[token.address] = with_default_program(
                token.tagged(TokenType.EXTERNAL, LISTED_PRIORITY)
            )
            snapshot.external.add(token.address)

        for token in self._extra_tokens:
            snapshot.table[token.address] = with_default_program(
                token.tagged(TokenType.CURATED, LISTED_PRIORITY)
            )
            snapshot.curated.add(token.address)

        self._snapshot = snapshot
        self._generation += 1
        logger.info(
            f"Token table loaded: {len(snapshot.table)} tokens "
            f"(official={len(snapshot.official)}, external={len(snapshot.external)}, "
            f"curated={len(snapshot.curated)})"
        )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def token_map(self) -> Mapping[str, TokenRecord]:
        """Read-only view of the current table."""
        return MappingProxyType(self._snapshot.table)

    @property
    def token_list(self) -> list[TokenRecord]:
        return list(self._snapshot.table.values())

    @property
    def mint_group(self) -> ProvenanceGroups:
        snapshot = self._snapshot
        return ProvenanceGroups(
            official=frozenset(snapshot.official),
            external=frozenset(snapshot.external),
            curated=frozenset(snapshot.curated),
        )

    def get(self, address: str) -> TokenRecord | None:
        """Table lookup without any fallback."""
        return self._snapshot.table.get(address)

    def __contains__(self, address: object) -> bool:
        return address in self._snapshot.table

    def __len__(self) -> int:
        return len(self._snapshot.table)

    # ------------------------------------------------------------------
    # Resolve
    # ------------------------------------------------------------------

    async def resolve(self, address: str) -> TokenRecord:
        """
        Resolve a mint address to a token record.

        Args:
            address: Mint address, or the native alias ``SOL``

        Returns:
            The table entry, or a record obtained from the API or the ledger

        Raises:
            EmptyInputError: If ``address`` is empty
            UnknownMintError: If no source knows the address
        """
        if not address:
            raise EmptyInputError("please input mint")
        address = str(address)

        if (info := self._snapshot.table.get(address)) is not None:
            return info
        if address.upper() == NATIVE_ALIAS:
            return NATIVE_TOKEN

        if (info := await self._resolve_from_api(address)) is not None:
            return info
        return await self._resolve_from_ledger(address)

    async def _resolve_from_api(self, address: str) -> TokenRecord | None:
        try:
            results = await self._api.get_token_info([address])
        except Exception as e:
            logger.warning(f"Metadata API lookup for {address} failed, trying ledger: {e}")
            return None

        match = next((r for r in results if r.address == address), None)
        if match is None:
            return None

        info = with_default_program(match.tagged(TokenType.CURATED, API_PRIORITY))
        self._remember(info)
        return info

    async def _resolve_from_ledger(self, address: str) -> TokenRecord:
        if not is_valid_address(address, self._codec):
            raise UnknownMintError(address, {"reason": "not a valid account address"})

        try:
            account = await self._ledger.get_account_info(address)
        except Exception as e:
            logger.warning(f"Ledger lookup for {address} failed: {e}")
            raise UnknownMintError(address, {"reason": str(e)}) from e

        if account is None:
            raise UnknownMintError(address)

        try:
            mint = MINT_LAYOUT.decode(account.data[: MINT_LAYOUT.span])
        except LayoutError as e:
            raise UnknownMintError(
                address, {"reason": f"account data is not a mint: {e.message}"}
            ) from e

        symbol = address[:UNKNOWN_SYMBOL_LENGTH]
        info = TokenRecord(
            chain_id=MAINNET_CHAIN_ID,
            address=address,
            program_id=account.owner,
            logo_uri="",
            symbol=symbol,
            name=symbol,
            decimals=mint["decimals"],
            tags=frozenset(),
            priority=LEDGER_PRIORITY,
            type=TokenType.UNKNOWN,
        )
        self._remember(info)
        return info

    def _remember(self, info: TokenRecord) -> None:
        """Add a lazily resolved record to the current snapshot."""
        snapshot = self._snapshot
        snapshot.table[info.address] = info
        snapshot.curated.add(info.address)
