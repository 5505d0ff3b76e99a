"""Tests for the ggprobe CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from gguf_builder import T, build_gguf
from gguf_probe import __version__
from gguf_probe.cli import main


# ---------------------------------------------------------------------------
# version / help
# ---------------------------------------------------------------------------


class TestBasics:
    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "facts" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# facts
# ---------------------------------------------------------------------------


class TestFactsCommand:
    def test_renders_facts(self, full_gguf: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["facts", full_gguf]) == 0
        out = capsys.readouterr().out
        assert "Q4_K_M" in out
        assert "1.1B" in out
        assert "23" in out

    def test_json_out(self, full_gguf: str, tmp_path: Path) -> None:
        out_path = tmp_path / "facts.json"
        assert main(["facts", full_gguf, "--json-out", str(out_path)]) == 0
        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert data == {
            "layer_count": 23,
            "context_length": 2048,
            "embedding_length": 2048,
            "architecture": "llama",
            "size_label": "1.1B",
            "quant_type": "Q4_K_M",
        }

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["facts", str(tmp_path / "missing.gguf")]) == 2
        assert "File not found" in capsys.readouterr().out

    def test_not_gguf(self, write_file: Callable[..., str], capsys: pytest.CaptureFixture[str]) -> None:
        path = write_file(b"\x00" * 64, "weights.bin")
        assert main(["facts", path]) == 1
        assert "Unknown model" in capsys.readouterr().out

    def test_max_entries_zero_scans_everything(self, write_file: Callable[..., str], tmp_path: Path) -> None:
        filler = [(f"x.{i}", T.UINT8, 0) for i in range(150)]
        path = write_file(build_gguf(filler + [("llama.block_count", T.UINT32, 40)]))
        out_path = tmp_path / "facts.json"
        assert main(["facts", path, "--max-entries", "0", "--json-out", str(out_path)]) == 0
        assert json.loads(out_path.read_text(encoding="utf-8"))["layer_count"] == 41


# ---------------------------------------------------------------------------
# keys
# ---------------------------------------------------------------------------


class TestKeysCommand:
    def test_lists_keys(self, minimal_gguf: str, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["keys", minimal_gguf]) == 0
        out = capsys.readouterr().out
        assert "UINT32" in out
        assert "STRING" in out

    def test_json_out(self, full_gguf: str, tmp_path: Path) -> None:
        out_path = tmp_path / "keys.json"
        assert main(["keys", full_gguf, "--json-out", str(out_path)]) == 0
        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert [e["key"] for e in data][:2] == ["general.architecture", "general.name"]
        tokens = next(e for e in data if e["key"] == "tokenizer.ggml.tokens")
        assert tokens["value_type"] == "ARRAY"
        assert tokens["element_type"] == "STRING"
        assert tokens["count"] == 3

    def test_stops_on_corrupt_entry(
        self, write_file: Callable[..., str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = write_file(build_gguf([("general.architecture", T.STRING, "llama")], kv_count=3))
        assert main(["keys", path]) == 1
        assert "GGUFTruncatedError" in capsys.readouterr().out
