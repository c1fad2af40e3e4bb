"""Run-scoped content deduplication."""

from __future__ import annotations

import hashlib
from threading import Lock


def fingerprint(content: str) -> str:
    """Return the SHA-256 hex digest of ``content``."""

    return hashlib.sha256(content.encode("utf-8")).hexdigest()


class SeenSet:
    """Thread-safe set of content fingerprints seen during one run."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._lock = Lock()

    def check_and_mark(self, digest: str) -> bool:
        """Return ``True`` if ``digest`` was already recorded, otherwise record it.

        Membership test and insert share one critical section, so among
        concurrent callers with the same digest exactly one gets ``False``.
        """

        with self._lock:
            if digest in self._seen:
                return True
            self._seen.add(digest)
            return False

    def __contains__(self, digest: object) -> bool:
        with self._lock:
            return digest in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)


__all__ = ["SeenSet", "fingerprint"]
