"""API route modules."""

from dexfacts.api.routes.chain import router as chain_router
from dexfacts.api.routes.health import router as health_router
from dexfacts.api.routes.tokens import router as tokens_router

__all__ = [
    "chain_router",
    "health_router",
    "tokens_router",
]
