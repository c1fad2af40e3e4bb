"""Scan pipeline wiring the dispatcher, worker pool and result aggregator."""

from __future__ import annotations

import time
from dataclasses import dataclass

import httpx
import structlog
from rich.console import Console

from .config import ScanConfig, load_signature_specs
from .engine import (
    Channel,
    ContentFetcher,
    Dispatcher,
    Finding,
    MatchEngine,
    ResultAggregator,
    SeenSet,
    SignatureLibrary,
    TargetSource,
    WorkerPool,
)
from .engine.exporter import BaseExporter, ConsoleExporter, FileExporter
from .logging_conf import component_logger


@dataclass(slots=True)
class ScanSummary:
    """Counters describing one finished run."""

    dispatched: int = 0
    fetched: int = 0
    unreachable: int = 0
    duplicates: int = 0
    scanned: int = 0
    findings: int = 0
    failed: int = 0
    elapsed: float = 0.0


def load_library(config: ScanConfig) -> SignatureLibrary:
    """Load and compile the signature catalog named by ``config``."""

    return SignatureLibrary.compile(load_signature_specs(config.signatures_path))


class Scanner:
    """Central coordinator for a single scan run.

    Each call to :meth:`run` gets a fresh seen-set, so deduplication never
    leaks across runs.
    """

    def __init__(
        self,
        config: ScanConfig,
        library: SignatureLibrary,
        console: Console | None = None,
        error_console: Console | None = None,
        client: httpx.Client | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.library = library
        self.console = console
        self.error_console = error_console
        self.client = client
        self.logger = logger or component_logger("scanner")

    def run(self, source: TargetSource) -> ScanSummary:
        started = time.monotonic()
        self.logger.info(
            "scan_started",
            source=source.kind,
            workers=self.config.concurrency,
            signatures=len(self.library),
        )
        jobs: Channel[str] = Channel(self.config.channel_capacity)
        results: Channel[Finding] = Channel(self.config.channel_capacity)
        fetcher = ContentFetcher(
            self.config.fetch,
            client=self.client,
            max_connections=self.config.concurrency,
        )
        pool = WorkerPool(
            self.config.concurrency,
            fetcher=fetcher,
            seen=SeenSet(),
            engine=MatchEngine(self.library, excerpt_limit=self.config.output.excerpt_limit),
        )
        aggregator = ResultAggregator(results, self._create_exporters())
        dispatcher = Dispatcher(self.config.source_suffix)

        aggregator.start()
        pool.start(jobs, results)
        try:
            dispatched = dispatcher.dispatch(source, jobs)
        finally:
            stats = pool.join(results)
            received = aggregator.join()
            fetcher.close()

        summary = ScanSummary(
            dispatched=dispatched,
            fetched=stats.fetched,
            unreachable=stats.unreachable,
            duplicates=stats.duplicates,
            scanned=stats.scanned,
            findings=received,
            failed=stats.failed,
            elapsed=time.monotonic() - started,
        )
        self.logger.info(
            "scan_finished",
            dispatched=summary.dispatched,
            findings=summary.findings,
            duplicates=summary.duplicates,
            unreachable=summary.unreachable,
        )
        return summary

    def _create_exporters(self) -> list[BaseExporter]:
        exporters: list[BaseExporter] = [ConsoleExporter(self.console)]
        output = self.config.output
        if output.path is None:
            return exporters
        try:
            exporters.append(FileExporter(output.path, output.format))
        except OSError as exc:
            self.logger.error("output_file_unavailable", path=str(output.path), error=str(exc))
            if self.error_console is not None:
                self.error_console.print(
                    f"Error creating output file: {exc}", style="red", markup=False
                )
        return exporters


__all__ = ["ScanSummary", "Scanner", "load_library"]
