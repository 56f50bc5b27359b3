"""Shared utilities for model loading.

This module provides configuration objects, diagnostic and metric types, and
the structured logging helpers used by the loader and the CLI.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    LoadMetrics,
)
from .config import (
    PRESETS,
    ConfigError,
    ConfigValidationError,
    ExtractionConfig,
    GlobalConfig,
    GrammarConfig,
    LoaderConfig,
    PackingConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "LoadMetrics",
    "PRESETS",
    "ConfigError",
    "ConfigValidationError",
    "ExtractionConfig",
    "GlobalConfig",
    "GrammarConfig",
    "LoaderConfig",
    "PackingConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
