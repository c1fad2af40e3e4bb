"""Single consumer fanning findings out to every configured sink."""

from __future__ import annotations

from threading import Thread
from typing import Sequence

import structlog

from ..logging_conf import component_logger
from .channel import Channel
from .exporter import BaseExporter
from .matcher import Finding


class ResultAggregator:
    """Drain the result channel on a dedicated thread.

    The aggregator is the only owner of its exporters, so sinks need no
    locking. A finding a sink cannot write is reported and skipped; a sink
    whose stream raises ``OSError`` is dropped. Draining always goes on so
    workers never block on a dead consumer.
    """

    def __init__(
        self,
        results: Channel[Finding],
        exporters: Sequence[BaseExporter],
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.results = results
        self.exporters = list(exporters)
        self.logger = logger or component_logger("aggregator")
        self.received = 0
        self._thread = Thread(target=self._drain, name="jsecret-aggregator", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def join(self) -> int:
        self._thread.join()
        return self.received

    def _drain(self) -> None:
        active = list(self.exporters)
        try:
            for finding in self.results:
                self.received += 1
                for exporter in list(active):
                    try:
                        exporter.export(finding)
                    except OSError as exc:
                        # dead stream
                        self.logger.error("exporter_failed", exporter=exporter.name, error=str(exc))
                        active.remove(exporter)
                    except Exception as exc:  # noqa: BLE001
                        self.logger.error(
                            "export_skipped",
                            exporter=exporter.name,
                            target=finding.target,
                            error=str(exc),
                        )
        finally:
            for exporter in self.exporters:
                try:
                    exporter.flush()
                    exporter.close()
                except Exception as exc:  # noqa: BLE001
                    self.logger.error("exporter_close_failed", exporter=exporter.name, error=str(exc))


__all__ = ["ResultAggregator"]
