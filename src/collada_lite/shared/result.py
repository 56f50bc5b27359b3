"""Diagnostic and metric types attached to load results.

The parsing core reports failure only as an absent value. The loader turns
each absence into a ``DiagnosticEntry`` naming the stage that came up empty,
so callers can tell an unparseable file from one that simply lacks normals.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Optional data missing, defaults used
    ERROR = auto()      # Required data missing, load failed
    CRITICAL = auto()   # Input could not be processed at all


@dataclass
class DiagnosticEntry:
    """Single diagnostic produced while loading a model."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for JSON output."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "details": self.details or {},
        }


@dataclass
class LoadMetrics:
    """Timing and size figures for one load."""

    parse_time_ms: float = 0.0
    extraction_time_ms: float = 0.0
    characters_processed: int = 0
    element_count: int = 0
    max_depth: int = 0
    vertex_count: int = 0

    @property
    def total_time_ms(self) -> float:
        """Parse plus extraction time."""
        return self.parse_time_ms + self.extraction_time_ms

    @property
    def characters_per_second(self) -> float:
        """Parsing throughput."""
        if self.parse_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.parse_time_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parse_time_ms": self.parse_time_ms,
            "extraction_time_ms": self.extraction_time_ms,
            "characters_processed": self.characters_processed,
            "element_count": self.element_count,
            "max_depth": self.max_depth,
            "vertex_count": self.vertex_count,
        }
