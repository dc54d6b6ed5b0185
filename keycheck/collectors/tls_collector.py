"""
TLS Certificate Collector
==========================

Retrieves the leaf certificate a TLS endpoint presents during the
handshake.

The collector audits whatever the peer offers, so hostname checking and
chain verification are both disabled: a self-signed or expired leaf is
still returned for key-strength analysis.

Failure modes (DNS resolution, refused connection, timeout, handshake
failure, invalid port) are all raised as
:class:`~keycheck.core.errors.TLSConnectionError`.

References:
    - Rescorla, E. (2018). RFC 8446 -- The Transport Layer Security (TLS)
      Protocol Version 1.3.
    - Python ``ssl`` module. https://docs.python.org/3/library/ssl.html
"""

from __future__ import annotations

import socket
import ssl
from typing import Optional

from keycheck.core.errors import TLSConnectionError
from keycheck.parsers.target_parser import DEFAULT_TIMEOUT_SECONDS


def _validate_port(host: str, port: str) -> int:
    try:
        number = int(port)
    except (TypeError, ValueError):
        raise TLSConnectionError(host, port, f"invalid port {port!r}") from None
    if not 1 <= number <= 65535:
        raise TLSConnectionError(host, port, f"invalid port {port!r}: out of range")
    return number


class TLSCertificateFetcher:
    """Fetches the DER leaf certificate of ``host:port``.

    One TCP connection per call, closed on every exit path.

    Usage::

        fetcher = TLSCertificateFetcher(timeout=3.0)
        der = fetcher.fetch("example.com", "443")

    Args:
        timeout: Connect and handshake timeout in seconds.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout

    def _context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    def fetch(self, host: str, port: str) -> Optional[bytes]:
        """Connect, complete the handshake and return the leaf certificate.

        Args:
            host: Hostname or IP address.
            port: Port as given by the user; validated here.

        Returns:
            The DER-encoded leaf certificate, or ``None`` when the server
            completed the handshake without presenting one.

        Raises:
            TLSConnectionError: The endpoint could not be reached or the
                TLS handshake failed.
        """
        port_number = _validate_port(host, port)
        context = self._context()

        try:
            with socket.create_connection(
                (host, port_number), timeout=self.timeout
            ) as sock:
                with context.wrap_socket(sock, server_hostname=host or None) as ssock:
                    return ssock.getpeercert(binary_form=True)
        except socket.timeout as exc:
            raise TLSConnectionError(
                host, port, f"dial {host}:{port}: i/o timeout"
            ) from exc
        except ssl.SSLError as exc:
            raise TLSConnectionError(
                host, port, f"tls handshake with {host}:{port}: {exc.reason or exc}"
            ) from exc
        except (OSError, ValueError) as exc:
            raise TLSConnectionError(host, port, f"dial {host}:{port}: {exc}") from exc
