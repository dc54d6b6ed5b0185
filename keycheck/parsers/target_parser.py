"""
Target Parser
==============

Normalises the user-supplied pieces of a TLS scan: the host, the port list
and the connection timeout.

Host normalisation strips a leading ``https://`` or ``http://`` scheme and
anything after the first ``/``::

    "https://example.com/login"  ->  "example.com"

Port lists are comma separated and trimmed; empty entries are dropped and
an empty list falls back to ``["443"]``. Ports stay strings so that a bad
entry surfaces as a per-port connection failure instead of aborting the
whole scan.

Durations use unit-suffixed numbers, optionally chained::

    "5s"  "250ms"  "1m30s"  "1.5h"
"""

from __future__ import annotations

import re
from typing import Optional

DEFAULT_PORT: str = "443"
DEFAULT_TIMEOUT_SECONDS: float = 5.0

_SCHEMES: tuple[str, ...] = ("https://", "http://")

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def normalize_host(raw: str) -> str:
    """Strip scheme prefix, path suffix and surrounding whitespace."""
    host = raw.strip()
    for scheme in _SCHEMES:
        if host.lower().startswith(scheme):
            host = host[len(scheme):]
            break
    return host.split("/", 1)[0]


def parse_ports(raw: Optional[str]) -> list[str]:
    """Split a comma-separated port list, keeping input order.

    >>> parse_ports(" 443, 8443 ,,")
    ['443', '8443']
    >>> parse_ports("")
    ['443']
    """
    if not raw:
        return [DEFAULT_PORT]
    ports = [part.strip() for part in raw.split(",") if part.strip()]
    return ports or [DEFAULT_PORT]


def parse_duration(raw: str) -> Optional[float]:
    """Parse a duration string into seconds.

    Returns ``None`` when *raw* is not a valid, non-negative duration so
    the caller can decide on the fallback. A bare ``"0"`` is zero.
    """
    text = raw.strip()
    if text == "0":
        return 0.0
    if not text:
        return None

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            return None
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position == 0 or position != len(text):
        return None
    return total
