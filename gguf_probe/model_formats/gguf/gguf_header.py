# gguf_probe/model_formats/gguf/gguf_header.py
"""
GGUF framing: open a container, validate the fixed header, and position a
cursor at the first metadata entry.
"""

from __future__ import annotations

import os
import struct
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Iterator

from loguru import logger

from gguf_probe.io.file_reader import LocalFileSource

from .gguf import (
    DEFAULT_LIMITS,
    GGUF_MAGIC,
    HEADER_SIZE,
    GGUFBadMagicError,
    GGUFHeader,
    GGUFNotFoundError,
    GGUFTruncatedError,
    GGUFUnreadableError,
    ScanLimits,
)
from .gguf_values import GGUFCursor


@dataclass
class GGUFReader:
    """An open container: its header and a cursor over the metadata section."""

    path: str
    file_size: int
    header: GGUFHeader
    cursor: GGUFCursor


def parse_header(buf: memoryview) -> GGUFHeader:
    """Decode the 24-byte little-endian header at the start of ``buf``."""
    if len(buf) < len(GGUF_MAGIC):
        raise GGUFTruncatedError("File too small for GGUF magic")
    magic = bytes(buf[: len(GGUF_MAGIC)])
    if magic != GGUF_MAGIC:
        raise GGUFBadMagicError(f"Invalid magic {magic!r}; not GGUF")
    if len(buf) < HEADER_SIZE:
        raise GGUFTruncatedError(f"File too small for GGUF header ({len(buf)} < {HEADER_SIZE} bytes)")
    version, tensor_count, kv_count = struct.unpack_from("<IQQ", buf, len(GGUF_MAGIC))
    return GGUFHeader(magic=magic, version=version, tensor_count=tensor_count, kv_count=kv_count)


@contextmanager
def open_gguf(path: str, limits: ScanLimits = DEFAULT_LIMITS) -> Iterator[GGUFReader]:
    """Open ``path`` and yield a :class:`GGUFReader`.

    The mapping is released when the block exits, however it exits.

    Raises:
        GGUFNotFoundError: ``path`` does not exist.
        GGUFUnreadableError: ``path`` is not a regular file or cannot be opened.
        GGUFTruncatedError: the file is shorter than the header.
        GGUFBadMagicError: the signature is not ``GGUF``.
    """
    if not os.path.exists(path):
        raise GGUFNotFoundError(f"File not found: {path}")
    if not os.path.isfile(path):
        raise GGUFUnreadableError(f"Not a regular file: {path}")

    with ExitStack() as stack:
        try:
            mf = stack.enter_context(LocalFileSource(path).open())
        except FileNotFoundError as err:
            raise GGUFNotFoundError(f"File not found: {path}") from err
        except (OSError, ValueError) as err:
            raise GGUFUnreadableError(f"Cannot open {path}: {err}") from err

        header = parse_header(mf.view)
        logger.debug(
            "GGUF v{version}: {tensors} tensors, {kvs} metadata entries ({path})",
            version=header.version,
            tensors=header.tensor_count,
            kvs=header.kv_count,
            path=path,
        )
        yield GGUFReader(
            path=path,
            file_size=mf.size,
            header=header,
            cursor=GGUFCursor(mf.view, HEADER_SIZE, limits),
        )


def read_header(path: str) -> GGUFHeader:
    """Open ``path``, validate and return its header, and close it again."""
    with open_gguf(path) as reader:
        return reader.header
