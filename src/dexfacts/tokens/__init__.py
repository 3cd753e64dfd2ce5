"""Token metadata merge and resolution."""

from dexfacts.tokens.registry import ProvenanceGroups, TokenRegistry, with_default_program

__all__ = [
    "ProvenanceGroups",
    "TokenRegistry",
    "with_default_program",
]
