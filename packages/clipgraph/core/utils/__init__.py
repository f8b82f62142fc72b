"""Shared utilities for clipgraph."""

from clipgraph.core.utils.files import normalize_extensions
from clipgraph.core.utils.json import read_json
from clipgraph.core.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "normalize_extensions",
    "read_json",
]
