# gguf_probe/analysis/base.py
"""
Result models for metadata analysis.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ModelFacts:
    """Structural facts about a model, read from its GGUF metadata.

    Fields not present in the file keep these defaults.
    """

    layer_count: int = 32
    context_length: int = 4096
    embedding_length: int = 4096
    architecture: str = "unknown"
    size_label: str = ""
    quant_type: str = ""
