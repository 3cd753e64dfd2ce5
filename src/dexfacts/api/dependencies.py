"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from dexfacts.client import DexfactsClient


async def get_client(request: Request) -> DexfactsClient:
    """Get the facade client from app state."""
    return request.app.state.client


# Type alias for cleaner dependency injection
Client = Annotated[DexfactsClient, Depends(get_client)]
