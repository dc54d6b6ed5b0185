"""
Scan Orchestrator
==================

Walks a list of ports on one host, sequentially, and turns every port into
exactly one :class:`~keycheck.core.models.PortScanResult` row:

    ====================  ==========================================
    Outcome               Row
    ====================  ==========================================
    connection failure    ``Connection Failed`` / ``Error: <text>``
    no certificate        ``No Certificate``
    unparseable leaf      ``Parsing Failed`` / ``Cert parse error: ...``
    evaluated             verdict status, algorithm, length, expiry
    ====================  ==========================================

A failing port never stops the loop, so the report always holds one row
per input port, in input order.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from keycheck.core.errors import ParseError, TLSConnectionError
from keycheck.core.evaluator import EvaluationEngine
from keycheck.core.models import EvaluationResult, PortScanResult, ScanReport
from keycheck.core.standards import SelectedStandard
from keycheck.parsers.key_parser import KeyParser
from shared.logger import KeyLengthLogger

STATUS_CONNECTION_FAILED = "Connection Failed"
STATUS_NO_CERTIFICATE = "No Certificate"
STATUS_PARSING_FAILED = "Parsing Failed"

NO_CERTIFICATE_DETAIL = "Server did not present a certificate."


class CertificateFetcher(Protocol):
    def fetch(self, host: str, port: str) -> Optional[bytes]: ...


def _expiry_detail(result: EvaluationResult) -> str:
    if result.expiry is None:
        return "-"
    detail = f"Expires: {result.expiry}"
    if result.expiry_warning:
        detail += f" ({result.expiry_warning})"
    return detail


class ScanOrchestrator:
    """Runs the per-port fetch, parse, evaluate pipeline.

    Usage::

        orchestrator = ScanOrchestrator(TLSCertificateFetcher(timeout=5.0))
        report = orchestrator.scan("example.com", ["443", "8443"], selected)

    Args:
        fetcher: Anything with ``fetch(host, port) -> Optional[bytes]``.
        parser: Key parser; a default :class:`KeyParser` if omitted.
        evaluator: Evaluation engine; a default one if omitted.
        logger: Logger for per-port failures.
    """

    def __init__(
        self,
        fetcher: CertificateFetcher,
        *,
        parser: Optional[KeyParser] = None,
        evaluator: Optional[EvaluationEngine] = None,
        logger: Optional[KeyLengthLogger] = None,
    ) -> None:
        self.fetcher = fetcher
        self.parser = parser or KeyParser()
        self.evaluator = evaluator or EvaluationEngine()
        self.log = logger or KeyLengthLogger("keycheck.scan")

    def scan(
        self,
        host: str,
        ports: Sequence[str],
        standard: SelectedStandard,
        *,
        check_expiry: bool = False,
        now: Optional[datetime] = None,
    ) -> ScanReport:
        """Scan every port of *host* in order.

        Returns:
            A :class:`ScanReport` with ``len(results) == len(ports)``.
        """
        results: list[PortScanResult] = []
        evaluated = 0
        secure = 0

        with self.log.operation("tls_scan"):
            for port in ports:
                row = self._scan_port(host, port, standard, check_expiry, now)
                results.append(row)
                if row.secure is not None:
                    evaluated += 1
                    if row.secure:
                        secure += 1

        self.log.info(
            "Scanned %d port(s) on %s: %d evaluated, %d secure",
            len(results), host, evaluated, secure,
            host=host, standard=standard.name,
        )
        return ScanReport(
            host=host,
            standard=standard.name,
            results=results,
            evaluated_count=evaluated,
            secure_count=secure,
        )

    def _scan_port(
        self,
        host: str,
        port: str,
        standard: SelectedStandard,
        check_expiry: bool,
        now: Optional[datetime],
    ) -> PortScanResult:
        try:
            der = self.fetcher.fetch(host, port)
        except TLSConnectionError as exc:
            self.log.warning("Connection to %s:%s failed: %s", host, port, exc, host=host, port=port)
            return PortScanResult(
                port=port, status=STATUS_CONNECTION_FAILED, detail=f"Error: {exc}"
            )

        if not der:
            self.log.warning("%s:%s presented no certificate", host, port, host=host, port=port)
            return PortScanResult(
                port=port, status=STATUS_NO_CERTIFICATE, detail=NO_CERTIFICATE_DETAIL
            )

        try:
            key = self.parser.parse(der)
        except ParseError as exc:
            self.log.warning("Certificate from %s:%s not parsed: %s", host, port, exc, host=host, port=port)
            return PortScanResult(
                port=port,
                status=STATUS_PARSING_FAILED,
                detail=f"Cert parse error: {exc}",
            )

        result = self.evaluator.evaluate(
            key, standard, der if check_expiry else None, now=now
        )
        self.log.debug(
            "%s:%s %s %d bits -> %s", host, port, result.algorithm, result.length, result.status
        )
        return PortScanResult(
            port=port,
            status=result.status,
            algorithm=result.algorithm,
            length=result.length,
            detail=_expiry_detail(result) if check_expiry else "-",
            secure=result.secure,
            expiry=result.expiry,
            expiry_warning=result.expiry_warning,
        )
