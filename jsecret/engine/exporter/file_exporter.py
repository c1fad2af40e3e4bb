"""File based exporter supporting TXT/JSON/CSV."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Optional

from ...config import OutputFormat
from ..matcher import Finding
from .base import BaseExporter

CSV_FIELDS = ("target", "signature", "excerpt")


class FileExporter(BaseExporter):
    """Write findings to a file created fresh for each run."""

    name = "file"

    def __init__(self, path: Path, fmt: OutputFormat | str = OutputFormat.TXT) -> None:
        self.path = path
        self.format = OutputFormat(fmt)
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("w", encoding="utf-8", errors="backslashreplace", newline="")
        self._csv_writer: Optional[csv.DictWriter] = None
        self.count = 0

    def export(self, finding: Finding) -> None:
        if self.format is OutputFormat.JSON:
            json.dump(finding.as_record(), self._file, ensure_ascii=False)
            self._file.write("\n")
        elif self.format is OutputFormat.CSV:
            if not self._csv_writer:
                self._csv_writer = csv.DictWriter(self._file, fieldnames=CSV_FIELDS)
                self._csv_writer.writeheader()
            self._csv_writer.writerow(finding.as_record())
        else:  # txt
            self._file.write(finding.format_line() + "\n")
        self.count += 1

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


__all__ = ["CSV_FIELDS", "FileExporter"]
