"""Shared test fixtures for gguf-probe."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterator, List

import pytest
from loguru import logger

from gguf_builder import T, build_gguf


# ---------------------------------------------------------------------------
# File factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def write_file(tmp_path: Path) -> Callable[..., str]:
    """Write raw bytes under tmp_path and return the path as a string."""

    def _write(data: bytes, name: str = "model.gguf") -> str:
        p = tmp_path / name
        p.write_bytes(data)
        return str(p)

    return _write


@pytest.fixture()
def minimal_gguf(write_file: Callable[..., str]) -> str:
    """Header {v3, 10 tensors, 2 kvs} with a block count and an architecture."""
    return write_file(
        build_gguf(
            [
                ("llama.block_count", T.UINT32, 32),
                ("general.architecture", T.STRING, "llama"),
            ]
        )
    )


@pytest.fixture()
def full_gguf(write_file: Callable[..., str]) -> str:
    """A llama-style header carrying every extracted field plus noise."""
    return write_file(
        build_gguf(
            [
                ("general.architecture", T.STRING, "llama"),
                ("general.name", T.STRING, "Tiny Llama"),
                ("general.size_label", T.STRING, "1.1B"),
                ("general.file_type", T.UINT32, 15),
                ("general.quantization_version", T.UINT32, 2),
                ("llama.context_length", T.UINT32, 2048),
                ("llama.embedding_length", T.UINT32, 2048),
                ("llama.block_count", T.UINT32, 22),
                ("llama.attention.layer_norm_rms_epsilon", T.FLOAT32, 1e-5),
                ("llama.rope.freq_base", T.FLOAT32, 10000.0),
                ("tokenizer.ggml.model", T.STRING, "llama"),
                ("tokenizer.ggml.tokens", T.ARRAY, (T.STRING, ["<unk>", "<s>", "</s>"])),
                ("tokenizer.ggml.scores", T.ARRAY, (T.FLOAT32, [0.0, 0.0, 0.0])),
                ("tokenizer.ggml.add_bos_token", T.BOOL, True),
            ],
            tail=b"\x00" * 64,
        )
    )


# ---------------------------------------------------------------------------
# Logging capture
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Undo sinks installed by the CLI so later tests do not log into closed streams."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture()
def log_messages() -> Iterator[List[str]]:
    """Collect loguru messages (WARNING and above) emitted during the test."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
