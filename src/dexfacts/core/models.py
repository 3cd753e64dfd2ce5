"""Domain models for token metadata and ledger facts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .types import TokenType


class CamelModel(BaseModel):
    """Base model accepting both camelCase wire keys and snake_case names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )


class TransferFee(CamelModel):
    """One epoch-scoped transfer fee setting of a Token-2022 mint."""

    epoch: str = Field(..., description="Epoch from which the fee applies")
    maximum_fee: str = Field(..., description="Fee cap in base units")
    transfer_fee_basis_points: int = Field(..., ge=0, le=10_000)


class TransferFeeConfig(CamelModel):
    """Transfer-fee extension of a Token-2022 mint."""

    transfer_fee_config_authority: str = ""
    withdraw_withheld_authority: str = ""
    withheld_amount: str = "0"
    older_transfer_fee: TransferFee
    newer_transfer_fee: TransferFee


class TokenExtensions(CamelModel):
    """
    Optional off-chain extensions of a token record.

    Known extensions are typed; unrecognized keys are retained as extra fields
    and can be read through ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    coingecko_id: str | None = Field(default=None, description="CoinGecko asset id")
    fee_config: TransferFeeConfig | None = Field(
        default=None, description="Transfer-fee configuration"
    )


class TokenRecord(CamelModel):
    """Metadata of one token, keyed by its mint address."""

    chain_id: int = Field(default=101, description="Chain identifier")
    address: str = Field(..., min_length=1, description="Mint address (base-58)")
    program_id: str = Field(default="", description="Owning token program")
    logo_uri: str | None = Field(default=None, alias="logoURI", description="Logo URL")
    symbol: str = Field(default="", description="Display symbol")
    name: str = Field(default="", description="Display name")
    decimals: int = Field(..., ge=0, le=255, description="Decimal precision")
    tags: frozenset[str] = Field(default_factory=frozenset, description="Free-form tags")
    priority: int = Field(default=0, description="Provenance priority")
    type: TokenType | None = Field(default=None, description="How the record was obtained")
    extensions: TokenExtensions = Field(default_factory=TokenExtensions)

    def tagged(self, token_type: TokenType, priority: int, **updates: object) -> TokenRecord:
        """Return a copy carrying the given provenance type and priority."""
        return self.model_copy(update={"type": token_type, "priority": priority, **updates})


class EpochInfo(CamelModel):
    """Current epoch position of the ledger."""

    absolute_slot: int
    block_height: int | None = None
    epoch: int
    slot_index: int
    slots_in_epoch: int
    transaction_count: int | None = None


class AccountInfo(BaseModel):
    """Raw ledger account."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Owning program id")
    lamports: int = Field(default=0, ge=0)
    data: bytes = Field(default=b"", description="Raw account bytes")
    executable: bool = False
    rent_epoch: int | None = None


class PoolConfig(CamelModel):
    """Pool-configuration entry published by the metadata API."""

    id: str
    index: int
    protocol_fee_rate: int
    trade_fee_rate: int
    fund_fee_rate: int
    create_pool_fee: str
