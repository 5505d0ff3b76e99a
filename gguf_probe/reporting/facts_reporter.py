# gguf_probe/reporting/facts_reporter.py
"""
Console reporting for extracted model facts and metadata listings.
"""
from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gguf_probe.analysis.base import ModelFacts
from gguf_probe.model_formats.gguf.gguf import MetadataEntry
from gguf_probe.model_formats.gguf.gguf_values import GGUFValueType

console = Console()

# Long string values (chat templates, licenses) are cut to keep rows on one line.
MAX_VALUE_WIDTH = 70


def render_facts(path: str, facts: Optional[ModelFacts]) -> None:
    """Render the facts table, or an "unknown model" panel when there are none."""
    if facts is None:
        console.print(
            Panel(f"[bold red]Unknown model[/bold red]: no metadata could be read from {escape(path)}")
        )
        return

    t = Table(title="Model Facts", box=box.SIMPLE_HEAVY)
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row("Path", escape(path))
    t.add_row("Architecture", escape(facts.architecture))
    t.add_row("Size Label", escape(facts.size_label) or "[dim]-[/dim]")
    t.add_row("Quantization", facts.quant_type or "[dim]-[/dim]")
    t.add_row("Layers", str(facts.layer_count))
    t.add_row("Context Length", str(facts.context_length))
    t.add_row("Embedding Length", str(facts.embedding_length))
    console.print(t)


def _format_value(entry: MetadataEntry) -> str:
    if entry.value_type == GGUFValueType.ARRAY:
        elem = GGUFValueType(entry.element_type).name if entry.element_type is not None else "?"
        return f"[{elem} x {entry.count}]"
    value_str = str(entry.value)
    if len(value_str) > MAX_VALUE_WIDTH:
        value_str = value_str[: MAX_VALUE_WIDTH - 3] + "..."
    return value_str


def render_entries(entries: List[MetadataEntry], error: Optional[str] = None) -> None:
    """Render a metadata listing, followed by the reason it stopped early, if any."""
    table = Table(title="Metadata Entries", box=box.ROUNDED, title_style="bold magenta")
    table.add_column("Index", justify="right", style="dim")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Type", style="yellow")
    table.add_column("Region", justify="right", style="white")
    table.add_column("Value", style="white")

    for index, entry in enumerate(entries):
        table.add_row(
            str(index),
            escape(entry.key),
            GGUFValueType(entry.value_type).name,
            f"[{entry.offset_start}, {entry.offset_end})",
            escape(_format_value(entry)),
        )

    console.print(table)
    if error:
        console.print(f"[bold red]Listing stopped:[/bold red] {escape(error)}")
