# gguf_probe/cli.py
"""
cli.py

Rich console CLI:
- facts:   extract model facts (layers, context, embedding, architecture,
           quantization) from a .gguf file.
- keys:    list the metadata entries of a .gguf file with their byte regions.
- version: show the package version.
"""
from __future__ import annotations

import argparse
import os
from typing import List, Optional

from rich.console import Console

from gguf_probe import __version__
from gguf_probe.analysis.entries import iter_entries
from gguf_probe.analysis.extractor import extract_model_facts
from gguf_probe.logging import configure_logging
from gguf_probe.model_formats.gguf.gguf import DEFAULT_LIMITS, GGUFParseError, MetadataEntry, ScanLimits
from gguf_probe.reporting import facts_reporter
from gguf_probe.reporting.json_reporter import write_json

console = Console()


def _add_limit_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--max-entries",
        type=int,
        default=DEFAULT_LIMITS.max_entries,
        help=f"Metadata entries to scan, 0 for all (default: {DEFAULT_LIMITS.max_entries})",
    )
    p.add_argument(
        "--max-string-length",
        type=int,
        default=DEFAULT_LIMITS.max_string_length,
        help=f"Longest accepted string in bytes (default: {DEFAULT_LIMITS.max_string_length})",
    )
    p.add_argument(
        "--max-array-length",
        type=int,
        default=DEFAULT_LIMITS.max_array_length,
        help=f"Largest accepted array element count (default: {DEFAULT_LIMITS.max_array_length})",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")


def _limits_from_args(args: argparse.Namespace) -> ScanLimits:
    return ScanLimits(
        max_entries=args.max_entries or None,
        max_string_length=args.max_string_length,
        max_array_length=args.max_array_length,
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ggprobe",
        description="Read model facts from GGUF metadata without loading tensor data.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = p.add_subparsers(dest="cmd", title="Available Commands", metavar="<command>")

    sp_facts = sub.add_parser("facts", help="Extract model facts from a .gguf file")
    sp_facts.add_argument("path", help="Path to model file (.gguf)")
    sp_facts.add_argument(
        "--json-out", type=str, default=None, help="Write the facts as JSON to this path"
    )
    _add_limit_args(sp_facts)

    sp_keys = sub.add_parser("keys", help="List the metadata entries of a .gguf file")
    sp_keys.add_argument("path", help="Path to model file (.gguf)")
    sp_keys.add_argument(
        "--json-out", type=str, default=None, help="Write the listing as JSON to this path"
    )
    _add_limit_args(sp_keys)

    sub.add_parser("version", help="Show the version of gguf-probe")

    return p


def _run_facts(args: argparse.Namespace) -> int:
    facts = extract_model_facts(args.path, _limits_from_args(args))
    facts_reporter.render_facts(args.path, facts)
    if facts is None:
        return 1

    if args.json_out:
        write_json(facts, args.json_out)
        console.print(f"[dim]Wrote JSON report → {args.json_out}[/dim]")
    return 0


def _run_keys(args: argparse.Namespace) -> int:
    entries: List[MetadataEntry] = []
    error: Optional[str] = None
    try:
        for entry in iter_entries(args.path, _limits_from_args(args)):
            entries.append(entry)
    except GGUFParseError as e:
        error = f"{type(e).__name__}: {e}"

    facts_reporter.render_entries(entries, error)
    if args.json_out:
        write_json(entries, args.json_out)
        console.print(f"[dim]Wrote JSON report → {args.json_out}[/dim]")
    return 1 if error else 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.cmd == "version":
        console.print(f"gguf-probe version {__version__}")
        return 0

    if args.cmd in ("facts", "keys"):
        configure_logging(debug=args.debug)
        if not os.path.exists(args.path):
            console.print(f"[red]File not found:[/red] {args.path}")
            return 2
        if args.cmd == "facts":
            return _run_facts(args)
        return _run_keys(args)

    parser.print_help()
    return 1
