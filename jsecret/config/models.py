"""Pydantic models used across the jsecret configuration flow."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; JSecret/1.0; +https://github.com/user/jsecret)"
DEFAULT_MAX_CONTENT_BYTES = 10 * 1024 * 1024


class OutputFormat(str, Enum):
    """Formats supported by the file sink."""

    TXT = "txt"
    JSON = "json"
    CSV = "csv"


class SignatureSpec(BaseModel):
    """Uncompiled catalog entry: a display name plus a regular expression."""

    model_config = ConfigDict(frozen=True)

    name: str
    pattern: str

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Signature name cannot be empty")
        return value


class FetchConfig(BaseModel):
    """Controls for content acquisition."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_content_bytes: int = DEFAULT_MAX_CONTENT_BYTES
    verify_tls: bool = True
    follow_redirects: bool = True

    @model_validator(mode="after")
    def _validate_limits(self) -> "FetchConfig":
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.max_content_bytes < 1:
            raise ValueError("max_content_bytes must be >= 1")
        return self


class OutputConfig(BaseModel):
    """Where and how findings are written besides the console."""

    path: Path | None = None
    format: OutputFormat = OutputFormat.TXT
    excerpt_limit: int = 100

    @field_validator("path", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @field_validator("excerpt_limit")
    @classmethod
    def _validate_excerpt(cls, value: int) -> int:
        if value < 1:
            raise ValueError("excerpt_limit must be >= 1")
        return value


class ScanConfig(BaseModel):
    """Full set of knobs for one scan run."""

    concurrency: int = 50
    quiet: bool = False
    source_suffix: str = ".js"
    # Python 没有无缓冲队列，容量 1 是最接近的阻塞交接
    channel_capacity: int = 1
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    signatures_path: Path | None = None
    log_file: Path | None = None

    @field_validator("signatures_path", "log_file", mode="before")
    @classmethod
    def _coerce_optional_path(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @model_validator(mode="after")
    def _validate_pool(self) -> "ScanConfig":
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.channel_capacity < 1:
            raise ValueError("channel_capacity must be >= 1")
        if not self.source_suffix:
            raise ValueError("source_suffix cannot be empty")
        return self


__all__ = [
    "DEFAULT_MAX_CONTENT_BYTES",
    "DEFAULT_USER_AGENT",
    "FetchConfig",
    "OutputConfig",
    "OutputFormat",
    "ScanConfig",
    "SignatureSpec",
]
