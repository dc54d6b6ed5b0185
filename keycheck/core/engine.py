"""
KeyCheck Engine
================

Central facade for the KeyCheck key length classifier. The
:class:`KeyCheckEngine` wires configuration, the standards catalog, the
key parser, the evaluation engine and the TLS scan orchestrator behind a
handful of calls used by the CLI.

Architecture follows the Facade pattern (Gamma et al., 1994), providing
a simplified interface over the individual subsystems.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
    - NIST SP 800-57 Part 1 Rev. 5 (2020). Recommendation for Key Management.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from keycheck.analyzers.ecc_key import ECCKey
from keycheck.analyzers.rsa_key import RSAKey
from keycheck.analyzers.symmetric_key import SymmetricKey
from keycheck.collectors.tls_collector import TLSCertificateFetcher
from keycheck.core.errors import UnreadableInputError
from keycheck.core.evaluator import EvaluationEngine
from keycheck.core.models import EvaluationResult, ScanReport, Standard
from keycheck.core.orchestrator import CertificateFetcher, ScanOrchestrator
from keycheck.core.standards import (
    DEFAULT_STANDARDS_PATH,
    SelectedStandard,
    StandardsCatalog,
)
from keycheck.parsers.key_parser import KeyParser
from keycheck.parsers.target_parser import (
    DEFAULT_TIMEOUT_SECONDS,
    normalize_host,
    parse_duration,
    parse_ports,
)
from shared.config import KeyLengthConfig
from shared.logger import KeyLengthLogger


class KeyCheckEngine:
    """Runs KeyCheck operations against one configuration.

    Usage::

        engine = KeyCheckEngine()
        result = engine.evaluate_file(Path("server.crt"), standard="BSI")
        report = engine.scan_tls("https://example.com/", ports="443,8443")
        engine.recommendations(2035)

    Args:
        config: Loaded configuration; defaults when omitted.
        standards_file: Overrides ``[keycheck] standards_file``.
        logger: Logger instance; built from ``[global]`` when omitted.

    Attributes:
        config: KeyLength configuration instance.
        logger: Logger for the keycheck engine.
    """

    def __init__(
        self,
        config: Optional[KeyLengthConfig] = None,
        *,
        standards_file: Union[str, Path, None] = None,
        logger: Optional[KeyLengthLogger] = None,
    ) -> None:
        self.config = config or KeyLengthConfig()
        self.logger = logger or KeyLengthLogger.from_config(
            "keycheck", self.config.global_settings
        )
        self.standards_file = Path(
            standards_file
            or self.config.keycheck.standards_file
            or DEFAULT_STANDARDS_PATH
        )

        self._parser = KeyParser()
        self._evaluator = EvaluationEngine(
            expiry_warning_days=self.config.keycheck.expiry_warning_days
        )

    # ------------------------------------------------------------------ #
    #  Standards
    # ------------------------------------------------------------------ #

    def load_standards(
        self, standard: Optional[str] = None
    ) -> tuple[StandardsCatalog, SelectedStandard]:
        """Load the catalog and resolve *standard* (config default if ``None``)."""
        name = self.config.keycheck.standard if standard is None else standard
        self.logger.debug("Loading standards from %s", self.standards_file)
        return StandardsCatalog.load(self.standards_file, name)

    def list_standards(self) -> dict[str, Standard]:
        """All standards in the catalog, sorted by name."""
        catalog = StandardsCatalog.from_file(self.standards_file)
        return {
            name: catalog[name] for name in sorted(catalog.available_standards())
        }

    # ------------------------------------------------------------------ #
    #  File evaluation
    # ------------------------------------------------------------------ #

    def evaluate_bytes(
        self,
        data: bytes,
        *,
        standard: Optional[str] = None,
        check_expiry: Optional[bool] = None,
        now: Optional[datetime] = None,
    ) -> EvaluationResult:
        """Parse and evaluate raw key or certificate bytes.

        Raises:
            ConfigError: The standards catalog or standard is invalid.
            ParseError: *data* is not usable key material.
        """
        _, selected = self.load_standards(standard)
        if check_expiry is None:
            check_expiry = self.config.keycheck.check_expiry

        key = self._parser.parse(data)
        self.logger.debug("Parsed %s key of %d bits", key.get_algorithm(), key.get_length())
        return self._evaluator.evaluate(
            key, selected, data if check_expiry else None, now=now
        )

    def evaluate_file(
        self,
        file_path: Union[str, Path],
        *,
        standard: Optional[str] = None,
        check_expiry: Optional[bool] = None,
        now: Optional[datetime] = None,
    ) -> EvaluationResult:
        """Read *file_path* and evaluate its contents."""
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise UnreadableInputError(str(path), str(exc)) from exc

        with self.logger.operation("file_scan"):
            result = self.evaluate_bytes(
                data, standard=standard, check_expiry=check_expiry, now=now
            )
            self.logger.info("%s: %s", path, result.status, file=str(path))
        return result

    def evaluate_symmetric(
        self,
        bits: int,
        *,
        standard: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> EvaluationResult:
        """Evaluate a symmetric key of *bits* length."""
        _, selected = self.load_standards(standard)
        return self._evaluator.evaluate(SymmetricKey(bits), selected, now=now)

    # ------------------------------------------------------------------ #
    #  TLS scan
    # ------------------------------------------------------------------ #

    def resolve_timeout(self, timeout: Optional[str] = None) -> float:
        """Parse *timeout* (config default if ``None``) into seconds.

        Invalid or zero durations fall back to the default with a warning.
        """
        raw = self.config.keycheck.timeout if timeout is None else timeout
        seconds = parse_duration(raw)
        if not seconds:
            self.logger.warning(
                "Invalid timeout %r, using default %ss", raw, DEFAULT_TIMEOUT_SECONDS
            )
            return DEFAULT_TIMEOUT_SECONDS
        return seconds

    def scan_tls(
        self,
        host: str,
        *,
        ports: Union[str, Sequence[str], None] = None,
        standard: Optional[str] = None,
        check_expiry: Optional[bool] = None,
        timeout: Optional[str] = None,
        fetcher: Optional[CertificateFetcher] = None,
        now: Optional[datetime] = None,
    ) -> ScanReport:
        """Scan the leaf certificates served on *host* across *ports*.

        Args:
            host: Hostname; scheme prefix and path suffix are stripped.
            ports: Comma-separated string or sequence of port strings.
            standard: Standard name (config default if ``None``).
            check_expiry: Attach expiry details (config default if ``None``).
            timeout: Duration string such as ``"5s"``.
            fetcher: Certificate fetcher; a TLS fetcher if omitted.
            now: Reference instant for the evaluation.

        Raises:
            ConfigError: The standards catalog or standard is invalid.
        """
        _, selected = self.load_standards(standard)

        target = normalize_host(host)
        if ports is None:
            ports = self.config.keycheck.ports
        port_list = parse_ports(ports) if isinstance(ports, str) else list(ports)
        if check_expiry is None:
            check_expiry = self.config.keycheck.check_expiry
        if fetcher is None:
            fetcher = TLSCertificateFetcher(timeout=self.resolve_timeout(timeout))

        orchestrator = ScanOrchestrator(
            fetcher,
            parser=self._parser,
            evaluator=self._evaluator,
            logger=self.logger,
        )
        with self.logger.timed(f"tls scan {target}"):
            return orchestrator.scan(
                target, port_list, selected, check_expiry=check_expiry, now=now
            )

    # ------------------------------------------------------------------ #
    #  Recommendations
    # ------------------------------------------------------------------ #

    @staticmethod
    def recommendations(year: Optional[int] = None) -> dict[str, int]:
        """Recommended minimum key lengths per algorithm for *year*."""
        if year is None:
            year = datetime.now(timezone.utc).year
        return {
            RSAKey.ALGORITHM: RSAKey().adjust_for_year(year),
            ECCKey.ALGORITHM: ECCKey().adjust_for_year(year),
            SymmetricKey.ALGORITHM: SymmetricKey(0).adjust_for_year(year),
        }
