# gguf_probe/__init__.py
"""
gguf_probe
==========

Read the structural facts of a GGUF model (layer count, context length,
embedding width, architecture, quantization) from its metadata header,
without loading tensor data.
"""
from __future__ import annotations

from importlib.metadata import version as _pkg_version

from gguf_probe.analysis.base import ModelFacts
from gguf_probe.analysis.extractor import extract_model_facts

__all__ = ["ModelFacts", "extract_model_facts", "__version__"]

try:
    # Read version dynamically from installed package metadata
    __version__: str = _pkg_version("ggufprobe")
except Exception:  # pragma: no cover - fallback for development environments
    __version__ = "0.0.0-dev"
