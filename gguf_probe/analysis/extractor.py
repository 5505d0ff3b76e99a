# gguf_probe/analysis/extractor.py
"""
Model facts extractor: one pass over the GGUF metadata section that picks out
layer count, context length, embedding width, architecture, size label and
quantization type.
"""
from __future__ import annotations

from typing import Optional

from loguru import logger

from gguf_probe.analysis.base import ModelFacts
from gguf_probe.model_formats.gguf.gguf import DEFAULT_LIMITS, GGUFParseError, ScanLimits
from gguf_probe.model_formats.gguf.gguf_header import GGUFReader, open_gguf
from gguf_probe.model_formats.gguf.gguf_rules import match_rule
from gguf_probe.model_formats.gguf.gguf_values import GGUFCursor
from gguf_probe.observability import Timer


class FactsExtractor:
    """Extracts :class:`ModelFacts` from a GGUF file without touching tensor data.

    ``extract`` never raises. A file that cannot be opened or has a bad header
    gives ``None``; a fault inside the metadata section stops the scan and
    returns whatever facts were found before it.
    """

    # Number of leading keys traced at DEBUG level.
    TRACE_KEYS = 20

    def __init__(self, path: str, limits: Optional[ScanLimits] = None):
        self.path = path
        self.limits = limits or DEFAULT_LIMITS

    def extract(self) -> Optional[ModelFacts]:
        try:
            with open_gguf(self.path, self.limits) as reader, Timer("metadata_scan") as t_scan:
                facts = self._scan(reader)
        except GGUFParseError as e:
            logger.warning("Cannot read GGUF header of {path}: {error}", path=self.path, error=e)
            return None
        except Exception:
            logger.exception("Unexpected error while reading {path}", path=self.path)
            return None

        logger.debug("Metadata scan of {path} took {ms:.2f}ms", path=self.path, ms=t_scan.duration_ms)
        return facts

    def _scan(self, reader: GGUFReader) -> ModelFacts:
        facts = ModelFacts()
        cur = reader.cursor
        n_entries = reader.header.kv_count
        if self.limits.max_entries is not None:
            n_entries = min(n_entries, self.limits.max_entries)

        for index in range(n_entries):
            try:
                key = cur.read_string()
            except GGUFParseError as e:
                logger.warning(
                    "Stopped scanning {path} at entry {index}: unreadable key ({error})",
                    path=self.path,
                    index=index,
                    error=e,
                )
                break
            try:
                self._consume(cur, index, key, facts)
            except GGUFParseError as e:
                logger.warning(
                    "Stopped scanning {path} at entry {index} ({key}): {error}",
                    path=self.path,
                    index=index,
                    key=key,
                    error=e,
                )
                break

        return facts

    def _consume(self, cur: GGUFCursor, index: int, key: str, facts: ModelFacts) -> None:
        """Read the type tag and value of one entry, storing it if a rule claims it."""
        value_type = cur.read_type()
        if index < self.TRACE_KEYS:
            logger.debug("Key[{index}]: {key}, type: {type}", index=index, key=key, type=value_type.name)

        rule = match_rule(key)
        if rule is None:
            cur.skip_value(value_type)
            return
        if value_type != rule.value_type:
            logger.warning(
                "Key {key} holds {actual}, expected {expected}; skipped",
                key=key,
                actual=value_type.name,
                expected=rule.value_type.name,
            )
            cur.skip_value(value_type)
            return

        value = rule.transform(cur.read_value(value_type))
        setattr(facts, rule.field, value)
        logger.debug("Found {field}={value} in key {key}", field=rule.field, value=value, key=key)


def extract_model_facts(path: str, limits: Optional[ScanLimits] = None) -> Optional[ModelFacts]:
    """Return the :class:`ModelFacts` of the GGUF file at ``path``, or ``None``."""
    return FactsExtractor(path, limits).extract()
