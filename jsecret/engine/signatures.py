"""Compiled, read-only signature library."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

import structlog

from ..config import SignatureSpec
from ..logging_conf import component_logger


@dataclass(frozen=True, slots=True)
class Signature:
    name: str
    pattern: re.Pattern[str]


class SignatureLibrary:
    """Ordered, immutable collection of compiled signatures.

    Built once at start-up; afterwards it is only iterated, so workers can
    share one instance without locking.
    """

    def __init__(self, signatures: Iterable[Signature]) -> None:
        self._signatures: tuple[Signature, ...] = tuple(signatures)

    @classmethod
    def compile(
        cls,
        specs: Iterable[SignatureSpec],
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> "SignatureLibrary":
        """Compile ``specs`` in order, dropping entries whose pattern is invalid."""

        log = logger or component_logger("signatures")
        compiled: list[Signature] = []
        for spec in specs:
            try:
                pattern = re.compile(spec.pattern)
            except re.error as exc:
                log.debug("signature_dropped", signature=spec.name, error=str(exc))
                continue
            compiled.append(Signature(name=spec.name, pattern=pattern))
        return cls(compiled)

    @property
    def names(self) -> list[str]:
        return [signature.name for signature in self._signatures]

    def __iter__(self) -> Iterator[Signature]:
        return iter(self._signatures)

    def __len__(self) -> int:
        return len(self._signatures)


__all__ = ["Signature", "SignatureLibrary"]
