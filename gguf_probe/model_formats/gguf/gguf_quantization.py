# gguf_probe/model_formats/gguf/gguf_quantization.py
"""
GGUF file types (``general.file_type``) and their display names.
"""
from __future__ import annotations

from enum import IntEnum


class LlamaFileType(IntEnum):
    """Known ``general.file_type`` codes, named by their quantization label."""

    F32 = 0
    F16 = 1
    Q4_0 = 2
    Q4_1 = 3
    # 4 and 5 are retired mixed-precision variants
    Q5_0 = 6
    Q5_1 = 7
    Q8_0 = 8
    Q8_1 = 9
    Q2_K = 10
    Q3_K_S = 11
    Q3_K_M = 12
    Q3_K_L = 13
    Q4_K_S = 14
    Q4_K_M = 15
    Q5_K_S = 16
    Q5_K_M = 17
    Q6_K = 18


def quant_type_name(code: int) -> str:
    """Human-readable label for a file type code; ``Q{code}`` when unknown."""
    try:
        return LlamaFileType(code).name
    except ValueError:
        return f"Q{code}"
