"""Content acquisition for remote URLs and local files."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Literal

import httpx
import structlog

from ..config import FetchConfig
from ..logging_conf import component_logger

REMOTE_PREFIXES = ("http://", "https://")

Origin = Literal["remote", "local"]


def is_remote(target: str) -> bool:
    """Return ``True`` when ``target`` looks like an HTTP(S) address."""

    return target.startswith(REMOTE_PREFIXES) and len(target.split("/")) > 2


@dataclass(slots=True)
class FetchResult:
    """Outcome of one fetch; ``text`` is empty whenever anything went wrong."""

    target: str
    origin: Origin
    text: str = ""
    error: str | None = None
    status_code: int | None = None
    truncated: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class ContentFetcher:
    """Read a target's body without ever raising to the caller."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        client: httpx.Client | None = None,
        max_connections: int = 100,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.config = config or FetchConfig()
        self.logger = logger or component_logger("fetcher")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            follow_redirects=self.config.follow_redirects,
            verify=self.config.verify_tls,
            timeout=self.config.timeout,
            limits=httpx.Limits(max_connections=max_connections),
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ContentFetcher":
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    def fetch(self, target: str) -> FetchResult:
        if is_remote(target):
            return self._fetch_remote(target)
        return self._fetch_local(target)

    # ------------------------------------------------------------------
    def _fetch_remote(self, target: str) -> FetchResult:
        """Stream ``target`` under the byte cap and a total deadline.

        The deadline is checked as each chunk arrives, so one fetch takes at
        most ``timeout`` plus a single read timeout.
        """

        limit = self.config.max_content_bytes
        deadline = time.monotonic() + self.config.timeout
        headers = {"User-Agent": self.config.user_agent}
        try:
            with self._client.stream(
                "GET", target, headers=headers, timeout=self.config.timeout
            ) as response:
                chunks: list[bytes] = []
                size = 0
                truncated = False
                for chunk in response.iter_bytes():
                    if time.monotonic() > deadline:
                        raise httpx.ReadTimeout("body read exceeded timeout", request=response.request)
                    remaining = limit - size
                    if len(chunk) > remaining:
                        chunks.append(chunk[:remaining])
                        truncated = True
                        break
                    chunks.append(chunk)
                    size += len(chunk)
                status_code = response.status_code
                charset = response.charset_encoding
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self.logger.warning("fetch_failed", target=target, origin="remote", error=str(exc))
            return FetchResult(target=target, origin="remote", error=str(exc))

        if truncated:
            self.logger.warning("content_truncated", target=target, limit=limit)
        self.logger.debug("fetched", target=target, status_code=status_code, size=size)
        return FetchResult(
            target=target,
            origin="remote",
            text=_decode(b"".join(chunks), charset),
            status_code=status_code,
            truncated=truncated,
        )

    def _fetch_local(self, target: str) -> FetchResult:
        limit = self.config.max_content_bytes
        try:
            with open(target, "rb") as stream:
                data = stream.read(limit + 1)
        except (OSError, ValueError) as exc:
            self.logger.warning("fetch_failed", target=target, origin="local", error=str(exc))
            return FetchResult(target=target, origin="local", error=str(exc))

        truncated = len(data) > limit
        if truncated:
            data = data[:limit]
            self.logger.warning("content_truncated", target=target, limit=limit)
        return FetchResult(target=target, origin="local", text=_decode(data), truncated=truncated)


def _decode(payload: bytes, charset: str | None = None) -> str:
    try:
        return payload.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return payload.decode("utf-8", errors="replace")


__all__ = ["ContentFetcher", "FetchResult", "REMOTE_PREFIXES", "is_remote"]
