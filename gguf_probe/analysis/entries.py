# gguf_probe/analysis/entries.py
"""
Metadata listing: walk the GGUF key/value section and report each entry with
its byte region.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from gguf_probe.model_formats.gguf.gguf import DEFAULT_LIMITS, MetadataEntry, ScanLimits
from gguf_probe.model_formats.gguf.gguf_header import open_gguf
from gguf_probe.model_formats.gguf.gguf_values import GGUFValueType


def iter_entries(path: str, limits: Optional[ScanLimits] = None) -> Iterator[MetadataEntry]:
    """Yield metadata entries in file order.

    Scalars and strings are decoded; arrays are skipped and described by their
    element type and count. At most ``limits.max_entries`` entries are read.

    Raises:
        GGUFParseError: the file cannot be opened or an entry is malformed.
            Entries before the fault have already been yielded.
    """
    limits = limits or DEFAULT_LIMITS
    with open_gguf(path, limits) as reader:
        cur = reader.cursor
        n_entries = reader.header.kv_count
        if limits.max_entries is not None:
            n_entries = min(n_entries, limits.max_entries)

        for _ in range(n_entries):
            start = cur.offset
            key = cur.read_string()
            value_type = cur.read_type()
            entry = MetadataEntry(
                key=key, value_type=value_type, offset_start=start, offset_end=start
            )
            if value_type is GGUFValueType.ARRAY:
                value_start = cur.offset
                entry.element_type = cur.read_type()
                entry.count = cur.read_u64()
                cur.offset = value_start
                cur.skip_value(value_type)
            else:
                entry.value = cur.read_value(value_type)
            entry.offset_end = cur.offset
            yield entry


def list_entries(path: str, limits: Optional[ScanLimits] = None) -> List[MetadataEntry]:
    """Eager form of :func:`iter_entries`."""
    return list(iter_entries(path, limits))
