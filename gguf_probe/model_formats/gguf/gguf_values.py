# gguf_probe/model_formats/gguf/gguf_values.py
"""
GGUF typed-value codec: decode or skip one metadata value by its type tag.

Every tag is dispatched through one table, so the decoding path and the
skipping path always agree on how many bytes a value occupies.
"""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Any, Dict, Tuple

from .gguf import (
    DEFAULT_LIMITS,
    GGUFCorruptArrayError,
    GGUFCorruptStringError,
    GGUFTruncatedError,
    GGUFUnknownTypeError,
    ScanLimits,
)


class GGUFValueType(IntEnum):
    """Metadata value type tags."""

    UINT8 = 0
    INT8 = 1
    UINT16 = 2
    INT16 = 3
    UINT32 = 4
    INT32 = 5
    FLOAT32 = 6
    BOOL = 7
    STRING = 8
    ARRAY = 9
    UINT64 = 10
    INT64 = 11
    FLOAT64 = 12


# Little-endian struct formats of the fixed-width tags.
SCALAR_FORMATS: Dict[GGUFValueType, str] = {
    GGUFValueType.UINT8: "<B",
    GGUFValueType.INT8: "<b",
    GGUFValueType.UINT16: "<H",
    GGUFValueType.INT16: "<h",
    GGUFValueType.UINT32: "<I",
    GGUFValueType.INT32: "<i",
    GGUFValueType.FLOAT32: "<f",
    GGUFValueType.BOOL: "<?",
    GGUFValueType.UINT64: "<Q",
    GGUFValueType.INT64: "<q",
    GGUFValueType.FLOAT64: "<d",
}

SCALAR_SIZES: Dict[GGUFValueType, int] = {
    t: struct.calcsize(fmt) for t, fmt in SCALAR_FORMATS.items()
}

# Tags whose width is carried in the payload itself.
VARIABLE_TYPES = frozenset({GGUFValueType.STRING, GGUFValueType.ARRAY})

_unhandled = set(GGUFValueType) - set(SCALAR_FORMATS) - VARIABLE_TYPES
if _unhandled:
    raise RuntimeError(
        f"No codec entry for GGUF value types: {sorted(t.name for t in _unhandled)}"
    )

MAX_ARRAY_DEPTH = 16


def to_value_type(tag: int) -> GGUFValueType:
    """Map a raw tag to :class:`GGUFValueType`, rejecting unknown tags."""
    try:
        return GGUFValueType(tag)
    except ValueError:
        raise GGUFUnknownTypeError(f"Unknown GGUF value type {tag}") from None


class GGUFCursor:
    """Forward-only reader over a GGUF metadata section.

    The cursor never reads past the end of ``buf``: every read checks the
    remaining byte count first and raises :class:`GGUFTruncatedError`.
    String lengths and array counts are validated against ``limits`` before
    anything proportional to them is allocated or iterated.
    """

    __slots__ = ("_buf", "offset", "limits")

    def __init__(self, buf: memoryview, offset: int = 0, limits: ScanLimits = DEFAULT_LIMITS):
        self._buf = buf
        self.offset = offset
        self.limits = limits

    @property
    def remaining(self) -> int:
        return len(self._buf) - self.offset

    def _require(self, n: int, what: str) -> None:
        if n > self.remaining:
            raise GGUFTruncatedError(
                f"Need {n} bytes for {what} at offset {self.offset}, only {self.remaining} left"
            )

    def _unpack(self, fmt: str, what: str) -> Any:
        size = struct.calcsize(fmt)
        self._require(size, what)
        (v,) = struct.unpack_from(fmt, self._buf, self.offset)
        self.offset += size
        return v

    def _skip(self, n: int, what: str) -> None:
        self._require(n, what)
        self.offset += n

    def read_u32(self) -> int:
        return self._unpack("<I", "u32")

    def read_u64(self) -> int:
        return self._unpack("<Q", "u64")

    def read_type(self) -> GGUFValueType:
        """Read a u32 type tag."""
        return to_value_type(self.read_u32())

    def _string_length(self) -> int:
        at = self.offset
        n = self.read_u64()
        if n > self.limits.max_string_length:
            raise GGUFCorruptStringError(
                f"String length {n} at offset {at} exceeds limit {self.limits.max_string_length}"
            )
        return n

    def _array_header(self, depth: int) -> Tuple[GGUFValueType, int]:
        at = self.offset
        if depth >= MAX_ARRAY_DEPTH:
            raise GGUFCorruptArrayError(f"Arrays nested deeper than {MAX_ARRAY_DEPTH} at offset {at}")
        elem_type = self.read_type()
        count = self.read_u64()
        if count > self.limits.max_array_length:
            raise GGUFCorruptArrayError(
                f"Array of {count} {elem_type.name} at offset {at} exceeds limit "
                f"{self.limits.max_array_length}"
            )
        return elem_type, count

    def read_string(self) -> str:
        """Read a u64-length-prefixed UTF-8 string."""
        n = self._string_length()
        self._require(n, "string data")
        raw = bytes(self._buf[self.offset : self.offset + n])
        try:
            s = raw.decode("utf-8", "strict")
        except UnicodeDecodeError as e:
            raise GGUFCorruptStringError(
                f"String at offset {self.offset} is not valid UTF-8: {e.reason}"
            ) from e
        self.offset += n
        return s

    def read_value(self, value_type: int, _depth: int = 0) -> Any:
        """Decode one value. Arrays decode to lists."""
        vt = to_value_type(value_type)
        if vt is GGUFValueType.STRING:
            return self.read_string()
        if vt is GGUFValueType.ARRAY:
            elem_type, count = self._array_header(_depth)
            return [self.read_value(elem_type, _depth + 1) for _ in range(count)]
        return self._unpack(SCALAR_FORMATS[vt], vt.name)

    def skip_value(self, value_type: int, _depth: int = 0) -> None:
        """Advance past exactly one value without interpreting it."""
        vt = to_value_type(value_type)
        if vt is GGUFValueType.STRING:
            self._skip(self._string_length(), "string data")
        elif vt is GGUFValueType.ARRAY:
            elem_type, count = self._array_header(_depth)
            for _ in range(count):
                self.skip_value(elem_type, _depth + 1)
        else:
            self._skip(SCALAR_SIZES[vt], vt.name)
