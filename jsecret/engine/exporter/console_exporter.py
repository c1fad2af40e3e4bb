"""Console sink rendering findings with Rich."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from ..matcher import Finding
from .base import BaseExporter, printable


class ConsoleExporter(BaseExporter):
    """Print ``[target] name : excerpt`` lines, colourised on a terminal."""

    name = "console"

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True)

    def export(self, finding: Finding) -> None:
        line = Text.assemble(
            (f"[{printable(finding.target)}]", "cyan"),
            " ",
            (finding.signature, "green"),
            f" : {printable(finding.excerpt)}",
        )
        self.console.print(line, soft_wrap=True, highlight=False)

    def flush(self) -> None:
        self.console.file.flush()

    def close(self) -> None:
        self.flush()


__all__ = ["ConsoleExporter"]
