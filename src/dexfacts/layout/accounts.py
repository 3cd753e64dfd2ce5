"""Layouts of the on-chain accounts this package reads."""

from dexfacts.layout.fields import blob, bool_, public_key, seq, u8, u16, u32, u64, u128
from dexfacts.layout.schema import Layout

DISCRIMINATOR_SIZE = 8

# Pool configuration account of the constant-product AMM program.
CPMM_CONFIG_LAYOUT = Layout(
    [
        blob(DISCRIMINATOR_SIZE, "discriminator"),
        u8("bump"),
        bool_("disable_create_pool"),
        u16("index"),
        u64("trade_fee_rate"),
        u64("protocol_fee_rate"),
        u64("fund_fee_rate"),
        u64("create_pool_fee"),
        public_key("protocol_owner"),
        public_key("fund_owner"),
        seq(u64(), 16, "padding"),
    ]
)

# Pool state account of the constant-product AMM program.
CPMM_POOL_LAYOUT = Layout(
    [
        blob(DISCRIMINATOR_SIZE, "discriminator"),
        public_key("config_id"),
        public_key("pool_creator"),
        public_key("vault_a"),
        public_key("vault_b"),
        public_key("mint_lp"),
        public_key("mint_a"),
        public_key("mint_b"),
        public_key("mint_program_a"),
        public_key("mint_program_b"),
        public_key("observation_id"),
        u8("bump"),
        u8("status"),
        u8("lp_decimals"),
        u8("mint_decimal_a"),
        u8("mint_decimal_b"),
        u64("lp_amount"),
        u64("protocol_fees_mint_a"),
        u64("protocol_fees_mint_b"),
        u64("fund_fees_mint_a"),
        u64("fund_fees_mint_b"),
        u64("open_time"),
        u64("recent_epoch"),
        u128("trade_fees_token_a"),
        u128("trade_fees_token_b"),
        u128("cumulative_volume_token_a"),
        u128("cumulative_volume_token_b"),
        seq(u64(), 23, "padding"),
    ]
)

# Base SPL token mint account; Token-2022 mints append extension data after it.
MINT_LAYOUT = Layout(
    [
        u32("mint_authority_option"),
        public_key("mint_authority"),
        u64("supply"),
        u8("decimals"),
        bool_("is_initialized"),
        u32("freeze_authority_option"),
        public_key("freeze_authority"),
    ]
)
