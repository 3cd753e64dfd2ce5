"""Custom exception hierarchy for dexfacts."""

from typing import Any


class DexfactsError(Exception):
    """Base exception for all dexfacts errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LayoutError(DexfactsError):
    """Binary layout operation failed."""

    pass


class SchemaError(LayoutError):
    """Layout definition or record is inconsistent with its schema."""

    pass


class LengthMismatchError(LayoutError):
    """Buffer length does not equal the schema's total width."""

    def __init__(
        self,
        expected: int,
        actual: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Buffer length {actual} does not match layout span {expected}",
            details,
        )
        self.expected = expected
        self.actual = actual


class ValidationError(DexfactsError):
    """Input validation failed."""

    pass


class EmptyInputError(ValidationError):
    """A required identifier was empty."""

    pass


class ResolutionError(DexfactsError):
    """Failed to obtain a fact from any source."""

    pass


class UnknownMintError(ResolutionError):
    """Mint address could not be resolved by the table, the API, or the ledger."""

    def __init__(self, address: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Mint address not found: {address}", details)
        self.address = address


class UpstreamFetchError(ResolutionError):
    """Bounded retry of an upstream fetch gave up."""

    def __init__(
        self,
        message: str,
        attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.attempts = attempts


class UpstreamUnavailableError(ResolutionError):
    """Remote API or RPC endpoint is unavailable or answered with an error status."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code


class RpcError(UpstreamUnavailableError):
    """Ledger JSON-RPC call returned an error object."""

    def __init__(
        self,
        message: str,
        code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, source="ledger", details=details)
        self.code = code
