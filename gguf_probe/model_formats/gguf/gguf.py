# gguf_probe/model_formats/gguf/gguf.py
"""
GGUF shared structures and exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

GGUF_MAGIC = b"GGUF"

# magic(4) + version(u32) + tensor_count(u64) + kv_count(u64)
HEADER_SIZE = 24


@dataclass(frozen=True)
class ScanLimits:
    """Upper bounds applied to untrusted lengths and counts.

    Attributes:
        max_entries: Number of metadata entries scanned for facts. ``None``
            scans every entry the header declares.
        max_string_length: Largest accepted string length in bytes.
        max_array_length: Largest accepted array element count.
    """

    max_entries: Optional[int] = 100
    max_string_length: int = 10_000
    max_array_length: int = 1_000


DEFAULT_LIMITS = ScanLimits()


@dataclass
class GGUFHeader:
    magic: bytes
    version: int
    tensor_count: int
    kv_count: int


@dataclass
class MetadataEntry:
    key: str
    value_type: int
    offset_start: int
    offset_end: int
    value: Any = None
    element_type: Optional[int] = None  # arrays only
    count: Optional[int] = None  # arrays only

    @property
    def size(self) -> int:
        return self.offset_end - self.offset_start


class GGUFParseError(Exception):
    """Raised when a GGUF file is malformed."""


class GGUFNotFoundError(GGUFParseError):
    """The file does not exist."""


class GGUFUnreadableError(GGUFParseError):
    """The path exists but cannot be opened as a regular file."""


class GGUFTruncatedError(GGUFParseError):
    """Fewer bytes remain than a read requires."""


class GGUFBadMagicError(GGUFParseError):
    """The header signature is not ``GGUF``."""


class GGUFCorruptStringError(GGUFParseError):
    """A string length exceeds the sanity ceiling or is not valid UTF-8."""


class GGUFCorruptArrayError(GGUFParseError):
    """An array element count exceeds the sanity ceiling."""


class GGUFUnknownTypeError(GGUFParseError):
    """A value type tag outside the known set."""
