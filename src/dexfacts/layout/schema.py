"""Declarative fixed-size binary layouts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from dexfacts.core.exceptions import LengthMismatchError, SchemaError
from dexfacts.layout.codec import DEFAULT_CODEC, KeyCodec
from dexfacts.layout.fields import FieldKind, FieldSpec

Record = dict[str, Any]


class Layout:
    """
    An immutable, ordered schema of fields over a fixed-size byte buffer.

    Offsets are computed once at construction: each field starts where the
    previous one ends, so decoding consumes bytes strictly in field order with
    no gaps or overlaps. Integers are little-endian and unsigned.

    Encoding a decoded record reproduces the buffer, except that a bool byte
    other than 0 or 1 decodes to True and encodes back as 1.

    Usage:
        layout = Layout([pad(8), u8("bump"), u16("index"), u64("fee")])
        record = layout.decode(data)
        assert layout.encode(record) == data
    """

    __slots__ = ("_fields", "_offsets", "_span", "_codec")

    def __init__(
        self,
        fields: Iterable[FieldSpec],
        *,
        codec: KeyCodec | None = None,
    ) -> None:
        self._fields = tuple(fields)
        if not self._fields:
            raise SchemaError("Layout must contain at least one field")

        seen: set[str] = set()
        offsets: list[int] = []
        position = 0
        for spec in self._fields:
            if spec.name is not None:
                if spec.name in seen:
                    raise SchemaError(f"Duplicate field name: {spec.name}")
                seen.add(spec.name)
            offsets.append(position)
            position += spec.span

        self._offsets = tuple(offsets)
        self._span = position
        self._codec = codec or DEFAULT_CODEC

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return self._fields

    @property
    def span(self) -> int:
        """Total byte length of a buffer matching this layout."""
        return self._span

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self._fields if spec.name is not None)

    def offset_of(self, name: str) -> int:
        """Byte offset at which the named field starts."""
        for spec, offset in zip(self._fields, self._offsets):
            if spec.name == name:
                return offset
        raise KeyError(name)

    def decode(self, buffer: bytes | bytearray | memoryview) -> Record:
        """Decode a buffer of exactly ``span`` bytes into a name-keyed record."""
        data = memoryview(buffer)
        if len(data) != self._span:
            raise LengthMismatchError(expected=self._span, actual=len(data))

        record: Record = {}
        for spec, offset in zip(self._fields, self._offsets):
            if spec.is_padding:
                continue
            if spec.is_sequence:
                record[spec.name] = [
                    self._decode_value(spec, data[start : start + spec.width])
                    for start in range(offset, offset + spec.span, spec.width)
                ]
            else:
                record[spec.name] = self._decode_value(spec, data[offset : offset + spec.width])
        return record

    def encode(self, record: Mapping[str, Any]) -> bytes:
        """Encode a record; padding is zero-filled."""
        out = bytearray(self._span)
        for spec, offset in zip(self._fields, self._offsets):
            if spec.is_padding:
                continue
            if spec.name not in record:
                raise SchemaError(f"Missing value for field: {spec.name}")
            value = record[spec.name]

            if spec.is_sequence:
                if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
                    raise SchemaError(f"Field {spec.name} expects a sequence")
                if len(value) != spec.repeat:
                    raise SchemaError(
                        f"Field {spec.name} expects {spec.repeat} elements, got {len(value)}"
                    )
                for i, item in enumerate(value):
                    start = offset + i * spec.width
                    out[start : start + spec.width] = self._encode_value(spec, item)
            else:
                out[offset : offset + spec.width] = self._encode_value(spec, value)
        return bytes(out)

    def _decode_value(self, spec: FieldSpec, chunk: memoryview) -> Any:
        if spec.kind == FieldKind.UINT:
            return int.from_bytes(chunk, "little")
        if spec.kind == FieldKind.BOOL:
            # Nonzero bytes other than 1 are tolerated as true
            return chunk[0] != 0
        if spec.kind == FieldKind.PUBLIC_KEY:
            return self._codec.to_string(bytes(chunk))
        return bytes(chunk)

    def _encode_value(self, spec: FieldSpec, value: Any) -> bytes:
        if spec.kind == FieldKind.UINT:
            if not isinstance(value, int):
                raise SchemaError(f"Field {spec.name} expects an integer, got {value!r}")
            if value < 0 or value >= 1 << (8 * spec.width):
                raise SchemaError(
                    f"Value {value} does not fit in {spec.width} bytes for field {spec.name}"
                )
            return value.to_bytes(spec.width, "little")
        if spec.kind == FieldKind.BOOL:
            return b"\x01" if value else b"\x00"
        if spec.kind == FieldKind.PUBLIC_KEY:
            raw = value if isinstance(value, (bytes, bytearray)) else self._codec.to_bytes(value)
            if len(raw) != spec.width:
                raise SchemaError(f"Field {spec.name} expects {spec.width} key bytes")
            return bytes(raw)

        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise SchemaError(f"Field {spec.name} expects bytes, got {type(value).__name__}")
        raw = bytes(value)
        if len(raw) != spec.width:
            raise SchemaError(
                f"Field {spec.name} expects {spec.width} bytes, got {len(raw)}"
            )
        return raw

    def __repr__(self) -> str:
        return f"Layout(span={self._span}, fields={list(self.names)})"


def decode(layout: Layout, buffer: bytes | bytearray | memoryview) -> Record:
    return layout.decode(buffer)


def encode(layout: Layout, record: Mapping[str, Any]) -> bytes:
    return layout.encode(record)
