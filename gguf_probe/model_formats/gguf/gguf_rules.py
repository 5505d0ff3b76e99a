"""
Metadata key rules: which GGUF keys feed which model fact, and the value
type each one must carry to be trusted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from .gguf_quantization import quant_type_name
from .gguf_values import GGUFValueType


def _identity(v: Any) -> Any:
    return v


def _plus_output_layer(blocks: int) -> int:
    # llama.cpp offloads the output layer separately from the repeated blocks
    return blocks + 1


@dataclass(frozen=True)
class FieldRule:
    """Maps matching metadata keys onto one ``ModelFacts`` field."""

    field: str
    value_type: GGUFValueType
    exact: Tuple[str, ...] = ()
    suffixes: Tuple[str, ...] = ()
    contains: Tuple[str, ...] = ()
    transform: Callable[[Any], Any] = _identity

    def matches(self, key: str) -> bool:
        return (
            key in self.exact
            or key.endswith(self.suffixes)
            or any(fragment in key for fragment in self.contains)
        )


# Order matters: the first rule that matches a key claims it.
FIELD_RULES: List[FieldRule] = [
    FieldRule(
        "layer_count",
        GGUFValueType.UINT32,
        suffixes=(".block_count",),
        contains=("n_layer", "num_hidden_layers"),
        transform=_plus_output_layer,
    ),
    FieldRule(
        "context_length",
        GGUFValueType.UINT32,
        suffixes=(".context_length",),
        contains=("n_ctx",),
    ),
    FieldRule("embedding_length", GGUFValueType.UINT32, suffixes=(".embedding_length",)),
    FieldRule("architecture", GGUFValueType.STRING, exact=("general.architecture",)),
    FieldRule("size_label", GGUFValueType.STRING, exact=("general.size_label",)),
    FieldRule(
        "quant_type",
        GGUFValueType.UINT32,
        exact=("general.file_type",),
        transform=quant_type_name,
    ),
]


def match_rule(key: str) -> Optional[FieldRule]:
    """Return the first rule claiming ``key``, if any."""
    for rule in FIELD_RULES:
        if rule.matches(key):
            return rule
    return None
