"""Signature matching over fetched content."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .signatures import SignatureLibrary

DEFAULT_EXCERPT_LIMIT = 100
TRUNCATION_MARKER = "..."


@dataclass(frozen=True, slots=True)
class Finding:
    """One signature hit against one target."""

    target: str
    signature: str
    excerpt: str

    def as_record(self) -> dict[str, str]:
        return asdict(self)

    def format_line(self) -> str:
        return f"[{self.target}] {self.signature} : {self.excerpt}"


class MatchEngine:
    """Test every signature against a payload and report the first hit of each.

    Stateless apart from the shared read-only library, so one engine serves
    all workers.
    """

    def __init__(self, library: SignatureLibrary, excerpt_limit: int = DEFAULT_EXCERPT_LIMIT) -> None:
        self.library = library
        self.excerpt_limit = excerpt_limit

    def match(self, target: str, content: str) -> list[Finding]:
        if not content:
            return []
        findings: list[Finding] = []
        for signature in self.library:
            found = signature.pattern.search(content)
            if found is None:
                continue
            findings.append(
                Finding(target=target, signature=signature.name, excerpt=self.excerpt(found.group(0)))
            )
        return findings

    def excerpt(self, text: str) -> str:
        if len(text) > self.excerpt_limit:
            return text[: self.excerpt_limit] + TRUNCATION_MARKER
        return text


__all__ = ["DEFAULT_EXCERPT_LIMIT", "Finding", "MatchEngine", "TRUNCATION_MARKER"]
