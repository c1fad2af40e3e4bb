"""Typer CLI entrypoint for jsecret."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Optional, TextIO

import typer
import yaml
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import OutputFormat, ScanConfig, load_scan_config
from .engine import TargetSource
from .logging_conf import configure_logging
from .scanner import ScanSummary, Scanner, load_library

app = typer.Typer(
    help="Scan JavaScript files and URLs for leaked secrets.",
    add_completion=False,
    rich_markup_mode=None,
    context_settings={"help_option_names": ["-h", "--help"]},
)

EXAMPLES = """Examples:
  cat urls.txt | jsecret
  jsecret -u http://example.com/script.js
  jsecret -f urls.txt -t 100 -o results.txt
  jsecret -d /path/to/js/files
"""

BANNER = rf"""
       _                         _
      (_)                       | |
       _ ___  ___  ___ _ __ ___ | |_
      | / __|/ _ \/ __| '__/ _ \| __|
      | \__ \  __/ (__| | |  __/| |_
      | |___/\___|\___|_|  \___| \__|
     _/ |
    |__/   v{__version__}
"""


def _apply_overrides(
    config: ScanConfig,
    threads: Optional[int],
    output: Optional[Path],
    fmt: Optional[OutputFormat],
    silent: bool,
) -> ScanConfig:
    output_updates: dict[str, object] = {}
    if output is not None:
        output_updates["path"] = output
    if fmt is not None:
        output_updates["format"] = fmt
    updates: dict[str, object] = {"quiet": config.quiet or silent}
    if threads is not None:
        updates["concurrency"] = threads
    if output_updates:
        updates["output"] = config.output.model_copy(update=output_updates)
    return config.model_copy(update=updates)


def _render_summary(summary: ScanSummary) -> Table:
    table = Table(title="Scan summary", box=box.SIMPLE_HEAD)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")
    table.add_row("Dispatched", str(summary.dispatched))
    table.add_row("Fetched", str(summary.fetched))
    table.add_row("Unreachable", str(summary.unreachable))
    table.add_row("Duplicates", str(summary.duplicates))
    table.add_row("Scanned", str(summary.scanned))
    table.add_row("Findings", str(summary.findings))
    if summary.failed:
        table.add_row("Failed", str(summary.failed))
    table.add_row("Elapsed", f"{summary.elapsed:.2f}s")
    return table


def _stdin_targets() -> TextIO:
    """Piped stdin decoded so undecodable bytes survive as escaped surrogates."""

    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="surrogateescape")


def _stdin_is_piped() -> bool:
    stream = sys.stdin
    if stream is None:
        return False
    try:
        return not stream.isatty()
    except ValueError:
        return False


@app.command(epilog=EXAMPLES)
def scan(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Single URL or .js file to scan."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="File containing one target per line."),
    directory: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="Directory to scan recursively for .js files."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write results to this file."),
    threads: Optional[int] = typer.Option(
        None, "--threads", "-t", min=1, help="Number of concurrent workers (default 50)."
    ),
    fmt: Optional[OutputFormat] = typer.Option(
        None, "--format", case_sensitive=False, help="Output file format."
    ),
    silent: bool = typer.Option(False, "--silent", "-s", help="Silent mode (no banner or summary)."),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML/JSON file with scan settings."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    console = Console(highlight=False, soft_wrap=True)
    err_console = Console(stderr=True, highlight=False)

    try:
        config = _apply_overrides(load_scan_config(config_path), threads, output, fmt, silent)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as exc:
        err_console.print(f"Invalid configuration: {exc}", style="red", markup=False)
        raise typer.Exit(code=2)

    configure_logging(verbose=verbose, log_file=config.log_file)

    try:
        library = load_library(config)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as exc:
        err_console.print(f"Invalid signature catalog: {exc}", style="red", markup=False)
        raise typer.Exit(code=2)

    if not config.quiet:
        err_console.print(BANNER, style="bold blue")

    source = TargetSource(url=url, directory=directory, file=file)
    if source.empty:
        if not _stdin_is_piped():
            err_console.print("No input provided: pass -u, -f, -d or pipe targets on stdin.", style="yellow")
            typer.echo(ctx.get_help(), err=True)
            raise typer.Exit(code=0)
        source.stream = _stdin_targets()

    if directory and not config.quiet:
        err_console.print(f"[*] Scanning directory: {directory}", markup=False)

    scanner = Scanner(config, library, console=console, error_console=err_console)
    summary = scanner.run(source)

    if not config.quiet:
        err_console.print(_render_summary(summary))


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
