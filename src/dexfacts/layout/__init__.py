"""Binary layout decoding for on-chain account data."""

from dexfacts.layout.accounts import (
    CPMM_CONFIG_LAYOUT,
    CPMM_POOL_LAYOUT,
    DISCRIMINATOR_SIZE,
    MINT_LAYOUT,
)
from dexfacts.layout.codec import DEFAULT_CODEC, Base58Codec, KeyCodec, is_valid_address
from dexfacts.layout.fields import (
    FieldKind,
    FieldSpec,
    blob,
    bool_,
    pad,
    public_key,
    seq,
    u8,
    u16,
    u32,
    u64,
    u128,
)
from dexfacts.layout.schema import Layout, Record, decode, encode

__all__ = [
    # Schema
    "Layout",
    "Record",
    "decode",
    "encode",
    # Fields
    "FieldKind",
    "FieldSpec",
    "blob",
    "bool_",
    "pad",
    "public_key",
    "seq",
    "u8",
    "u16",
    "u32",
    "u64",
    "u128",
    # Codecs
    "Base58Codec",
    "DEFAULT_CODEC",
    "KeyCodec",
    "is_valid_address",
    # Account layouts
    "CPMM_CONFIG_LAYOUT",
    "CPMM_POOL_LAYOUT",
    "DISCRIMINATOR_SIZE",
    "MINT_LAYOUT",
]
