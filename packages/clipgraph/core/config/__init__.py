"""Configuration management for clipgraph."""

from clipgraph.core.config.loader import detect_format, load_app_config, load_config
from clipgraph.core.config.models import (
    AppConfig,
    CatalogConfig,
    ExportConfig,
    LoggingConfig,
    TransitionConfig,
)

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    # Models
    "AppConfig",
    "CatalogConfig",
    "ExportConfig",
    "LoggingConfig",
    "TransitionConfig",
]
