"""
KeyCheck Core Module
=====================

Data models, error taxonomy, standards catalog and certificate helpers
for the KeyCheck key length classifier. The evaluation engine, scan
orchestrator and facade live in sibling modules and are imported
directly.
"""

from keycheck.core.errors import (
    ConfigError,
    KeyCheckError,
    ParseError,
    TLSConnectionError,
)
from keycheck.core.models import (
    EvaluationResult,
    PortScanResult,
    ScanReport,
    Standard,
)
from keycheck.core.standards import SelectedStandard, StandardsCatalog

__all__ = [
    "ConfigError",
    "EvaluationResult",
    "KeyCheckError",
    "ParseError",
    "PortScanResult",
    "ScanReport",
    "SelectedStandard",
    "Standard",
    "StandardsCatalog",
    "TLSConnectionError",
]
