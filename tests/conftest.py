"""Pytest configuration providing shared fixtures."""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import Callable, Iterable

import httpx
import pytest
from rich.console import Console

from jsecret.config import ScanConfig, SignatureSpec, load_signature_specs
from jsecret.engine import SignatureLibrary


@pytest.fixture(scope="session")
def builtin_library() -> SignatureLibrary:
    return SignatureLibrary.compile(load_signature_specs())


@pytest.fixture
def make_library() -> Callable[..., SignatureLibrary]:
    def _builder(*pairs: tuple[str, str]) -> SignatureLibrary:
        return SignatureLibrary.compile(SignatureSpec(name=name, pattern=pattern) for name, pattern in pairs)

    return _builder


@pytest.fixture
def scan_config() -> Callable[..., ScanConfig]:
    def _builder(**overrides) -> ScanConfig:
        base = {"concurrency": 4, "quiet": True}
        base.update(overrides)
        return ScanConfig.model_validate(base)

    return _builder


@pytest.fixture
def capture_console() -> Callable[[], tuple[Console, StringIO]]:
    def _builder() -> tuple[Console, StringIO]:
        buffer = StringIO()
        return Console(file=buffer, highlight=False, soft_wrap=True, color_system=None), buffer

    return _builder


@pytest.fixture
def write_files(tmp_path: Path) -> Callable[[dict[str, str]], list[Path]]:
    def _writer(files: dict[str, str]) -> list[Path]:
        paths: list[Path] = []
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            paths.append(path)
        return paths

    return _writer


@pytest.fixture
def mock_client() -> Iterable[Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]]:
    clients: list[httpx.Client] = []

    def _builder(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _builder
    for client in clients:
        client.close()
