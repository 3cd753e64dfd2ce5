"""Remote collaborators: metadata API and ledger RPC."""

from dexfacts.clients.api import MetadataApi
from dexfacts.clients.base import (
    HttpCollaborator,
    LedgerSource,
    MetadataSource,
    RequestLogEntry,
)
from dexfacts.clients.ledger import LedgerClient

__all__ = [
    "HttpCollaborator",
    "LedgerClient",
    "LedgerSource",
    "MetadataApi",
    "MetadataSource",
    "RequestLogEntry",
]
