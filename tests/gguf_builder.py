"""Helpers that assemble synthetic GGUF files for tests."""

from __future__ import annotations

import struct
from typing import Any, Iterable, Optional, Tuple

from gguf_probe.model_formats.gguf.gguf_values import SCALAR_FORMATS, GGUFValueType

T = GGUFValueType


def gguf_string(s: str | bytes) -> bytes:
    raw = s.encode("utf-8") if isinstance(s, str) else s
    return struct.pack("<Q", len(raw)) + raw


def gguf_value(value_type: int, value: Any) -> bytes:
    """Encode one value. Arrays are given as ``(element_type, items)``."""
    if value_type == T.STRING:
        return gguf_string(value)
    if value_type == T.ARRAY:
        elem_type, items = value
        body = b"".join(gguf_value(elem_type, item) for item in items)
        return struct.pack("<IQ", elem_type, len(items)) + body
    return struct.pack(SCALAR_FORMATS[T(value_type)], value)


def gguf_kv(key: str, value_type: int, value: Any) -> bytes:
    return gguf_string(key) + struct.pack("<I", value_type) + gguf_value(value_type, value)


def gguf_header(
    kv_count: int, *, tensor_count: int = 10, version: int = 3, magic: bytes = b"GGUF"
) -> bytes:
    return magic + struct.pack("<IQQ", version, tensor_count, kv_count)


def build_gguf(
    entries: Iterable[Tuple[str, int, Any]],
    *,
    kv_count: Optional[int] = None,
    tensor_count: int = 10,
    version: int = 3,
    magic: bytes = b"GGUF",
    tail: bytes = b"",
) -> bytes:
    """Header plus encoded entries; ``kv_count`` defaults to the number given."""
    body = [gguf_kv(k, t, v) for k, t, v in entries]
    count = len(body) if kv_count is None else kv_count
    return (
        gguf_header(count, tensor_count=tensor_count, version=version, magic=magic)
        + b"".join(body)
        + tail
    )
