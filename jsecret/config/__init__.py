"""Configuration package exports."""

from .loader import BUILTIN_SIGNATURES, load_scan_config, load_signature_specs
from .models import (
    DEFAULT_USER_AGENT,
    FetchConfig,
    OutputConfig,
    OutputFormat,
    ScanConfig,
    SignatureSpec,
)

__all__ = [
    "BUILTIN_SIGNATURES",
    "DEFAULT_USER_AGENT",
    "FetchConfig",
    "OutputConfig",
    "OutputFormat",
    "ScanConfig",
    "SignatureSpec",
    "load_scan_config",
    "load_signature_specs",
]
