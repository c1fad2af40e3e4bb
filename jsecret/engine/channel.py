"""Bounded blocking hand-off channel shared by the pipeline stages."""

from __future__ import annotations

from queue import Queue
from threading import Lock
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosed(RuntimeError):
    """Raised when sending on a channel that has already been closed."""


class Channel(Generic[T]):
    """Queue wrapper with close semantics for many consumers.

    ``send`` blocks while the channel is full, which gives producers
    backpressure. Closing enqueues a sentinel behind any pending items;
    every consumer that reaches it puts it back so the other consumers
    see the close too.
    """

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError("Channel capacity must be >= 1")
        self.capacity = capacity
        self._queue: Queue = Queue(maxsize=capacity)
        self._lock = Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: T) -> None:
        if self._closed:
            raise ChannelClosed("send on closed channel")
        self._queue.put(item)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                self._queue.put(_CLOSED)
                return
            yield item


__all__ = ["Channel", "ChannelClosed"]
