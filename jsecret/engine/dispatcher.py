"""Turn one input source into a stream of scan targets."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TextIO

import structlog

from ..logging_conf import component_logger
from .channel import Channel
from .fetcher import is_remote


@dataclass(slots=True)
class TargetSource:
    """Candidate input sources; the first one set wins.

    Precedence: ``url``, then ``directory``, then ``file``, then ``stream``.
    """

    url: str | None = None
    directory: Path | None = None
    file: Path | None = None
    stream: TextIO | None = None

    @property
    def empty(self) -> bool:
        return not (self.url or self.directory or self.file or self.stream is not None)

    @property
    def kind(self) -> str:
        if self.url:
            return "url"
        if self.directory:
            return "directory"
        if self.file:
            return "file"
        if self.stream is not None:
            return "stream"
        return "none"


class Dispatcher:
    """Feed targets into the job channel and close it when input runs out."""

    def __init__(self, source_suffix: str = ".js", logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self.source_suffix = source_suffix
        self.logger = logger or component_logger("dispatcher")

    def dispatch(self, source: TargetSource, jobs: Channel[str]) -> int:
        """Send every target from ``source`` to ``jobs``; return how many were sent."""

        sent = 0
        try:
            for target in self.iter_targets(source):
                jobs.send(target)
                sent += 1
        finally:
            jobs.close()
        self.logger.debug("dispatch_finished", source=source.kind, dispatched=sent)
        return sent

    def iter_targets(self, source: TargetSource) -> Iterator[str]:
        if source.url:
            yield from self._single(source.url)
        elif source.directory:
            yield from self._walk(source.directory)
        elif source.file:
            yield from self._target_list(source.file)
        elif source.stream is not None:
            yield from _non_empty_lines(source.stream)

    # ------------------------------------------------------------------
    def _single(self, target: str) -> Iterator[str]:
        if is_remote(target) or target.endswith(self.source_suffix):
            yield target
            return
        self.logger.warning("target_ignored", target=target, suffix=self.source_suffix)

    def _walk(self, directory: Path) -> Iterator[str]:
        def _raise(exc: OSError) -> None:
            raise exc

        # 遍历出错即停止，已发出的目标照常扫描
        try:
            for root, dirnames, filenames in os.walk(directory, onerror=_raise):
                dirnames.sort()
                for name in sorted(filenames):
                    if name.endswith(self.source_suffix):
                        yield os.path.join(root, name)
        except OSError as exc:
            self.logger.error("directory_walk_failed", path=str(directory), error=str(exc))

    def _target_list(self, path: Path) -> Iterator[str]:
        try:
            stream = path.open("r", encoding="utf-8", errors="surrogateescape")
        except OSError as exc:
            self.logger.error("target_list_unreadable", path=str(path), error=str(exc))
            return
        with stream:
            yield from _non_empty_lines(stream)


def _non_empty_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        line = line.rstrip("\r\n")
        if line:
            yield line


__all__ = ["Dispatcher", "TargetSource"]
