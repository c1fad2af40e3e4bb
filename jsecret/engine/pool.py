"""Fixed-size worker pool draining the job channel."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, fields

import structlog

from ..logging_conf import component_logger
from .channel import Channel
from .dedup import SeenSet, fingerprint
from .fetcher import ContentFetcher
from .matcher import Finding, MatchEngine


@dataclass
class WorkerStats:
    """Per-worker counters, merged once the pool has exited."""

    processed: int = 0
    fetched: int = 0
    unreachable: int = 0
    duplicates: int = 0
    scanned: int = 0
    findings: int = 0
    failed: int = 0

    def merge(self, other: "WorkerStats") -> "WorkerStats":
        for item in fields(self):
            setattr(self, item.name, getattr(self, item.name) + getattr(other, item.name))
        return self


class WorkerPool:
    """Run ``workers`` independent fetch → dedup → match loops."""

    def __init__(
        self,
        workers: int,
        fetcher: ContentFetcher,
        seen: SeenSet,
        engine: MatchEngine,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.workers = workers
        self.fetcher = fetcher
        self.seen = seen
        self.engine = engine
        self.logger = logger or component_logger("pool")
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future[WorkerStats]] = []

    def start(self, jobs: Channel[str], results: Channel[Finding]) -> None:
        if self._executor is not None:
            raise RuntimeError("WorkerPool already started")
        self._executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="jsecret-worker")
        self._futures = [
            self._executor.submit(self._work, jobs, results) for _ in range(self.workers)
        ]

    def join(self, results: Channel[Finding]) -> WorkerStats:
        """Wait for every worker to exit, then close ``results``."""

        if self._executor is None:
            raise RuntimeError("WorkerPool was not started")
        total = WorkerStats()
        try:
            for future in as_completed(self._futures):
                total.merge(future.result())
        finally:
            self._executor.shutdown(wait=True)
            results.close()
        return total

    # ------------------------------------------------------------------
    def _work(self, jobs: Channel[str], results: Channel[Finding]) -> WorkerStats:
        stats = WorkerStats()
        for target in jobs:
            stats.processed += 1
            try:
                self._process(target, results, stats)
            except Exception as exc:  # noqa: BLE001
                stats.failed += 1
                self.logger.error("target_error", target=target, error=str(exc))
        return stats

    def _process(self, target: str, results: Channel[Finding], stats: WorkerStats) -> None:
        fetched = self.fetcher.fetch(target)
        if not fetched.text:
            if not fetched.ok:
                stats.unreachable += 1
            return
        stats.fetched += 1
        if self.seen.check_and_mark(fingerprint(fetched.text)):
            stats.duplicates += 1
            self.logger.debug("duplicate_content", target=target)
            return
        stats.scanned += 1
        for finding in self.engine.match(target, fetched.text):
            results.send(finding)
            stats.findings += 1


__all__ = ["WorkerPool", "WorkerStats"]
