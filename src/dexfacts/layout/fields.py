"""Field specifications for fixed-size binary layouts."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import ClassVar

from dexfacts.core.exceptions import SchemaError


class FieldKind(StrEnum):
    """Value kinds a layout field can hold."""

    UINT = "uint"  # Little-endian unsigned integer
    BOOL = "bool"
    PUBLIC_KEY = "public_key"  # 32-byte account identifier
    BLOB = "blob"  # Opaque bytes


@dataclass(frozen=True)
class FieldSpec:
    """
    One field of a layout.

    A field without a name is padding: it is skipped on decode and zero-filled
    on encode. A field with ``repeat`` decodes to a list of ``repeat`` values of
    the element kind instead of a scalar.
    """

    CANONICAL_WIDTHS: ClassVar[dict[FieldKind, frozenset[int]]] = {
        FieldKind.UINT: frozenset({1, 2, 4, 8, 16}),
        FieldKind.BOOL: frozenset({1}),
        FieldKind.PUBLIC_KEY: frozenset({32}),
    }

    kind: FieldKind
    width: int
    name: str | None = None
    repeat: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise SchemaError(f"Field width must be positive, got {self.width}")
        allowed = self.CANONICAL_WIDTHS.get(self.kind)
        if allowed is not None and self.width not in allowed:
            raise SchemaError(
                f"Width {self.width} is not valid for {self.kind} field",
                {"field": self.name, "allowed": sorted(allowed)},
            )
        if self.repeat is not None and self.repeat < 1:
            raise SchemaError(f"Repeat count must be at least 1, got {self.repeat}")
        if self.name is not None and not self.name:
            raise SchemaError("Field name must be non-empty or omitted for padding")

    @property
    def span(self) -> int:
        """Total bytes occupied by this field."""
        return self.width * (self.repeat or 1)

    @property
    def is_padding(self) -> bool:
        return self.name is None

    @property
    def is_sequence(self) -> bool:
        return self.repeat is not None

    def named(self, name: str) -> FieldSpec:
        return replace(self, name=name)


def u8(name: str | None = None) -> FieldSpec:
    return FieldSpec(FieldKind.UINT, 1, name)


def u16(name: str | None = None) -> FieldSpec:
    return FieldSpec(FieldKind.UINT, 2, name)


def u32(name: str | None = None) -> FieldSpec:
    return FieldSpec(FieldKind.UINT, 4, name)


def u64(name: str | None = None) -> FieldSpec:
    return FieldSpec(FieldKind.UINT, 8, name)


def u128(name: str | None = None) -> FieldSpec:
    return FieldSpec(FieldKind.UINT, 16, name)


def bool_(name: str | None = None) -> FieldSpec:
    return FieldSpec(FieldKind.BOOL, 1, name)


def public_key(name: str | None = None) -> FieldSpec:
    return FieldSpec(FieldKind.PUBLIC_KEY, 32, name)


def blob(width: int, name: str | None = None) -> FieldSpec:
    """Opaque bytes; unnamed blobs are padding."""
    return FieldSpec(FieldKind.BLOB, width, name)


def pad(width: int) -> FieldSpec:
    return blob(width)


def seq(element: FieldSpec, count: int, name: str | None = None) -> FieldSpec:
    """Fixed-length sequence of ``count`` elements shaped like ``element``."""
    if element.is_sequence:
        raise SchemaError("Nested sequences are not supported")
    return FieldSpec(element.kind, element.width, name, repeat=count)
