"""Codecs translating 32-byte account identifiers to and from text."""

from __future__ import annotations

from typing import Protocol

import base58

from dexfacts.core.exceptions import SchemaError

PUBLIC_KEY_LENGTH = 32


class KeyCodec(Protocol):
    """Converts raw account identifiers to their canonical string form."""

    def to_string(self, raw: bytes) -> str: ...

    def to_bytes(self, text: str) -> bytes: ...


class Base58Codec:
    """Base-58 (Bitcoin alphabet) codec used for ledger account identifiers."""

    def to_string(self, raw: bytes) -> str:
        return base58.b58encode(bytes(raw)).decode("ascii")

    def to_bytes(self, text: str) -> bytes:
        try:
            raw = base58.b58decode(text)
        except ValueError as e:
            raise SchemaError(f"Invalid base-58 identifier: {text!r}") from e
        if len(raw) != PUBLIC_KEY_LENGTH:
            raise SchemaError(
                f"Identifier {text!r} decodes to {len(raw)} bytes, expected {PUBLIC_KEY_LENGTH}"
            )
        return raw


def is_valid_address(text: str, codec: KeyCodec | None = None) -> bool:
    """Check whether ``text`` is a well-formed account identifier."""
    try:
        (codec or DEFAULT_CODEC).to_bytes(text)
    except SchemaError:
        return False
    return True


DEFAULT_CODEC: KeyCodec = Base58Codec()
