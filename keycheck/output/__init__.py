"""
KeyCheck Output Module
=======================

Console display and JSON report generation for KeyCheck results.
"""

from keycheck.output.console import KeyCheckConsoleOutput
from keycheck.output.report import KeyCheckReportGenerator

__all__ = [
    "KeyCheckConsoleOutput",
    "KeyCheckReportGenerator",
]
