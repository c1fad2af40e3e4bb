"""Configuration loading helpers for jsecret."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from .models import ScanConfig, SignatureSpec

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
BUILTIN_SIGNATURES = Path(__file__).resolve().parent / "signatures.yaml"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def load_scan_config(path: Path | None = None) -> ScanConfig:
    """Return the scan configuration, reading ``path`` when given."""

    if path is None:
        return ScanConfig()
    if path.suffix not in CONFIG_EXTENSIONS:
        raise ValueError(f"Unsupported configuration format: {path}")
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return ScanConfig.model_validate(_read_file(path))


def load_signature_specs(path: Path | None = None) -> list[SignatureSpec]:
    """Load the ordered signature catalog.

    The catalog is a mapping with a ``signatures`` list of ``{name, pattern}``
    entries. File order is kept as-is since it decides the order in which
    findings for one payload are reported.
    """

    catalog_path = path or BUILTIN_SIGNATURES
    if not catalog_path.exists():
        raise FileNotFoundError(f"Signature catalog not found: {catalog_path}")
    payload = _read_file(catalog_path)
    entries = payload.get("signatures") or []
    if not isinstance(entries, list):
        raise ValueError(f"`signatures` must be a list: {catalog_path}")
    return [SignatureSpec.model_validate(entry) for entry in entries]


__all__ = ["BUILTIN_SIGNATURES", "CONFIG_EXTENSIONS", "load_scan_config", "load_signature_specs"]
