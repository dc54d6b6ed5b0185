"""
KeyCheck Parsers Module
========================

Input parsing: key and certificate bytes into key material, and scan
targets (host, ports, timeout) into normalised values.
"""

from keycheck.parsers.key_parser import KeyParser
from keycheck.parsers.target_parser import (
    normalize_host,
    parse_duration,
    parse_ports,
)

__all__ = [
    "KeyParser",
    "normalize_host",
    "parse_duration",
    "parse_ports",
]
