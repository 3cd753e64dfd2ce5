"""Well-known ledger identifiers and the built-in native-asset entry."""

from dexfacts.core.models import TokenRecord
from dexfacts.core.types import Cluster, TokenType

MAINNET_CHAIN_ID = 101

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLwuFzT3A8qJbx9LSqp"

TOKEN_2022_TAG = "token-2022"

NATIVE_MINT = "So11111111111111111111111111111111111111112"
NATIVE_ALIAS = "SOL"

NATIVE_TOKEN = TokenRecord(
    chain_id=MAINNET_CHAIN_ID,
    address=NATIVE_MINT,
    program_id=TOKEN_PROGRAM_ID,
    logo_uri=f"https://img-v1.raydium.io/icon/{NATIVE_MINT}.png",
    symbol="WSOL",
    name="Wrapped SOL",
    decimals=9,
    tags=frozenset(),
    priority=0,
    type=TokenType.OFFICIAL,
)

DEFAULT_RPC_URLS: dict[Cluster, str] = {
    Cluster.MAINNET: "https://api.mainnet-beta.solana.com",
    Cluster.DEVNET: "https://api.devnet.solana.com",
}

EPOCH_INFO_TTL_MS = 30 * 1000
