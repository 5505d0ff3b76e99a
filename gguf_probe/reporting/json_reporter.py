# gguf_probe/reporting/json_reporter.py
"""
JSON reporting utilities.
"""

from __future__ import annotations

import json
from typing import Any

from gguf_probe.observability import to_dict


def write_json(obj: Any, path: str) -> None:
    """Write a dataclass (or a list of them) to ``path`` as pretty JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_dict(obj), f, indent=2)
