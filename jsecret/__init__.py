"""Concurrent secret scanner for JavaScript sources and URLs."""

from .scanner import ScanSummary, Scanner, load_library

__version__ = "2.0.0"

__all__ = ["ScanSummary", "Scanner", "__version__", "load_library"]
