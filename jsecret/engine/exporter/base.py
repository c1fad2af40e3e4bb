"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..matcher import Finding


def printable(value: str) -> str:
    """Escape lone surrogates left in targets decoded from undecodable file names."""

    return value.encode("utf-8", "backslashreplace").decode("utf-8")


class BaseExporter(ABC):
    """Uniform sink contract so the aggregator can fan findings out."""

    name: str = "exporter"

    @abstractmethod
    def export(self, finding: Finding) -> None:
        """Write a single finding."""

    def export_many(self, findings: Iterable[Finding]) -> None:
        for finding in findings:
            self.export(finding)

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""


__all__ = ["BaseExporter", "printable"]
