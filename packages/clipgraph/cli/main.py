"""Command-line interface for clipgraph.

Sub-commands:
    scan        List the clips found in a directory and their roles
    synthesize  Build an animation graph from a clip catalog and export it
    inspect     Validate and summarize an exported graph
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clipgraph.core.animation import (
    ClipCatalog,
    SynthesisError,
    SynthesisReport,
    classify_clip,
    describe_graph,
    find_clip_folder,
    load_clip_manifest,
    read_graph,
    scan_clip_directory,
    synthesize,
    write_graph,
)
from clipgraph.core.config import AppConfig, detect_format, load_app_config
from clipgraph.core.utils.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(args: argparse.Namespace, config: AppConfig | None = None) -> None:
    level = args.log_level or (config.logging.level if config else "WARNING")
    structured = args.structured_logs or (config.logging.structured if config else False)
    format_string = config.logging.format if config else None
    configure_logging(level=level, format_string=format_string, structured=structured)


def _print_report(report: SynthesisReport) -> None:
    table = Table(title="Role fulfillment")
    table.add_column("Role")
    table.add_column("Status")
    table.add_column("Clips")

    for entry in report.fulfillment:
        status = "[green]found[/green]" if entry.found else "[yellow]missing[/yellow]"
        table.add_row(entry.role.value, status, escape(", ".join(entry.clips)))

    console.print(table)

    if report.missing_roles:
        missing = ", ".join(role.value for role in report.missing_roles)
        console.print(f"[yellow]⚠️  No clips for: {missing}[/yellow]")
    if report.unclassified:
        console.print(f"Unclassified clips: {escape(', '.join(report.unclassified))}")


def _resolve_catalog(args: argparse.Namespace, config: AppConfig) -> ClipCatalog:
    """Pick the catalog source: CLI flags first, then config."""
    extensions = config.catalog.extensions
    recursive = config.catalog.recursive

    if args.manifest:
        return load_clip_manifest(args.manifest)
    if args.clips:
        return scan_clip_directory(args.clips, extensions, recursive=recursive)
    if args.character:
        folder = find_clip_folder(args.character)
        if folder is None:
            raise FileNotFoundError(f"No clip folder found next to character: {args.character}")
        return scan_clip_directory(folder, extensions, recursive=recursive)
    if config.catalog.manifest:
        return load_clip_manifest(config.catalog.manifest)
    if config.catalog.clip_dir:
        return scan_clip_directory(config.catalog.clip_dir, extensions, recursive=recursive)

    raise ValueError("No clip source given (use --clips, --manifest or --character)")


def _resolve_output(args: argparse.Namespace, config: AppConfig) -> tuple[Path, str]:
    """Output path and format.

    A recognised ``--out`` extension decides the format and must agree with
    ``--format``. Otherwise ``--format`` applies, then the config default.
    """
    if not args.out:
        fmt = args.format or config.export.format
        return Path(f"animation_graph.{fmt}"), fmt

    out = Path(args.out)
    try:
        suffix_fmt = detect_format(out)
    except ValueError:
        return out, args.format or config.export.format

    if args.format and args.format != suffix_fmt:
        raise ValueError(
            f"--format {args.format} conflicts with output file '{out.name}' ({suffix_fmt})"
        )
    return out, suffix_fmt


def cmd_scan(args: argparse.Namespace) -> int:
    """List clips in a directory with their classified role."""
    _setup_logging(args)

    extensions = args.ext or AppConfig().catalog.extensions
    catalog = scan_clip_directory(args.clip_dir, extensions, recursive=not args.no_recursive)

    table = Table(title=f"Clips in {escape(str(args.clip_dir))}")
    table.add_column("#", justify="right")
    table.add_column("Identifier", no_wrap=True)
    table.add_column("Role")
    table.add_column("Duration", justify="right")
    table.add_column("Path")

    for index, clip in enumerate(catalog, start=1):
        table.add_row(
            str(index),
            escape(clip.identifier),
            classify_clip(clip).value,
            f"{clip.duration:.2f}s",
            escape(clip.source_path),
        )

    console.print(table)
    console.print(f"[green]✅ Found {len(catalog)} clips[/green]")
    return 0


def cmd_synthesize(args: argparse.Namespace) -> int:
    """Synthesize and export an animation graph."""
    config = load_app_config(args.config)
    _setup_logging(args, config)

    catalog = _resolve_catalog(args, config)
    console.print(f"[bold]Synthesizing from {len(catalog)} clips...[/bold]")

    blend_duration = (
        args.blend_duration
        if args.blend_duration is not None
        else config.transitions.blend_duration
    )
    result = synthesize(catalog, blend_duration=blend_duration)
    graph = result.graph

    _print_report(result.report)

    out, fmt = _resolve_output(args, config)
    write_graph(graph, out, fmt=fmt, indent=config.export.indent)

    console.print(
        f"[green]✅ Graph written:[/green] {escape(str(out))} "
        f"({len(graph.states)} states, {len(graph.transitions)} transitions, "
        f"initial '{escape(graph.initial)}')"
    )
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Validate and summarize an exported graph."""
    _setup_logging(args)

    graph = read_graph(args.graph_file)
    summary = describe_graph(graph)

    params = Table(title="Parameters")
    params.add_column("Name")
    params.add_column("Kind")
    for name, kind in summary.parameters:
        params.add_row(escape(name), kind)
    console.print(params)

    states = Table(title="States")
    states.add_column("State")
    states.add_column("Role")
    states.add_column("Clip")
    states.add_column("Duration", justify="right")
    for info in summary.states:
        marker = " 📌" if info.is_initial else ""
        states.add_row(
            f"{escape(info.state_id)}{marker}",
            info.role.value,
            escape(info.clip),
            f"{info.duration:.2f}s",
        )
    console.print(states)
    console.print(f"Initial state: [bold]{escape(summary.initial)}[/bold]")

    transitions = Table(title="Transitions")
    transitions.add_column("From")
    transitions.add_column("To")
    transitions.add_column("Condition")
    transitions.add_column("Exit time", justify="right")
    transitions.add_column("Blend", justify="right")
    for t in summary.transitions:
        exit_time = f"{t.exit_time:.2f}" if t.exit_time is not None else "-"
        transitions.add_row(
            escape(t.source),
            escape(t.target),
            escape(t.condition),
            exit_time,
            f"{t.blend_duration:.2f}s",
        )
    console.print(transitions)

    for role in summary.missing_roles:
        console.print(f"[yellow]⚠️  No {role.value} state[/yellow]")

    if summary.violations:
        console.print("[red]❌ Graph is inconsistent:[/red]")
        for violation in summary.violations:
            console.print(f"   - {escape(violation)}")
        return 1

    console.print("[green]✅ Graph is consistent[/green]")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from config, else WARNING)",
    )
    common.add_argument(
        "--structured-logs", action="store_true", help="Emit logs as JSON lines"
    )

    p = argparse.ArgumentParser(
        prog="clipgraph",
        description="clipgraph - classify motion clips and synthesize animation state machines",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    scan = sub.add_parser("scan", parents=[common], help="List clips in a directory")
    scan.add_argument("clip_dir", help="Directory holding clip assets")
    scan.add_argument(
        "--ext", action="append", default=None, help="Accepted clip suffix (repeatable)"
    )
    scan.add_argument("--no-recursive", action="store_true", help="Do not descend into sub-directories")
    scan.set_defaults(handler=cmd_scan)

    synth = sub.add_parser("synthesize", parents=[common], help="Build and export a graph")
    source = synth.add_mutually_exclusive_group()
    source.add_argument("--clips", help="Directory holding clip assets")
    source.add_argument("--manifest", help="YAML/JSON clip manifest")
    source.add_argument("--character", help="Character directory; clip folder is auto-detected")
    synth.add_argument("--out", default=None, help="Output file (.json, .yaml or .yml)")
    synth.add_argument("--config", default=None, help="Path to app config (default: clipgraph.yaml)")
    synth.add_argument(
        "--blend-duration", type=float, default=None, help="Transition blend length in seconds"
    )
    synth.add_argument("--format", choices=["json", "yaml"], default=None, help="Export format")
    synth.set_defaults(handler=cmd_synthesize)

    inspect = sub.add_parser("inspect", parents=[common], help="Validate and summarize a graph")
    inspect.add_argument("graph_file", help="Exported graph file")
    inspect.set_defaults(handler=cmd_inspect)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        return args.handler(args)
    except SynthesisError as e:
        console.print(f"[red]ERROR: Synthesis failed: {escape(str(e))}[/red]")
    except (FileNotFoundError, NotADirectoryError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
    return 1


if __name__ == "__main__":
    sys.exit(main())
