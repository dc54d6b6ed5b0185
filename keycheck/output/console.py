"""
KeyCheck Console Output
========================

Rich-based console formatters for KeyCheck results: the single-key
verdict table, the per-port TLS scan table with its summary, the
standards catalog and the year-based recommendations.

Uses the KeyLength shared console infrastructure for consistent styling.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Mapping, Optional

from rich.text import Text

from keycheck.core.models import EvaluationResult, ScanReport, Standard
from shared.console import KeyLengthConsole

_SECURE_SYMBOL = "✓"
_WARNING_SYMBOL = "!"
_ERROR_SYMBOL = "✗"


def _status_cell(status: str, secure: Optional[bool]) -> Text:
    if secure is True:
        return Text(f"[{_SECURE_SYMBOL}] {status}", style="kl.secure")
    if secure is False:
        return Text(f"[{_ERROR_SYMBOL}] {status}", style="kl.insecure")
    return Text(f"[{_ERROR_SYMBOL}] {status}", style="kl.failed")


class KeyCheckConsoleOutput:
    """Console output formatters for KeyCheck results.

    Usage::

        output = KeyCheckConsoleOutput(KeyLengthConsole())
        output.display_evaluation(result, source="server.crt")
        output.display_scan(report)
    """

    def __init__(self, console: Optional[KeyLengthConsole] = None) -> None:
        self.console = console or KeyLengthConsole()

    def display_evaluation(self, result: EvaluationResult, source: str = "") -> None:
        """Show the verdict for one key, plus certificate expiry when known."""
        self.console.section("Analysis Results")
        if source:
            self.console.print(f"  File: [bold]{source}[/bold]")
        self.console.print(f"  Standard: [bold]{result.standard}[/bold]")

        status = _status_cell(result.status, result.secure)
        rows: list[tuple[object, ...]] = [
            ("Algorithm", result.algorithm, status),
            ("Key Length", f"{result.length} bits", status),
            ("Threshold", f"{result.threshold} bits", ""),
            ("Recommended", f"{result.recommended_length} bits", ""),
        ]
        if result.expiry is not None:
            if result.expiry_warning:
                expiry_status = Text(
                    f"[{_WARNING_SYMBOL}] {result.expiry_warning}", style="kl.warning"
                )
            else:
                expiry_status = status
            rows.append(("Expiry", result.expiry, expiry_status))

        self.console.table("Key Evaluation", ["Property", "Value", "Status"], rows)

    def display_scan(self, report: ScanReport) -> None:
        """Show one row per scanned port followed by the scan summary."""
        self.console.section("TLS Scan Results")
        rows = [
            (
                row.port,
                _status_cell(row.status, row.secure),
                row.algorithm or "-",
                f"{row.length} bits" if row.length else "-",
                row.detail or "-",
            )
            for row in report.results
        ]
        self.console.table(
            f"{report.host} ({report.standard})",
            ["Port", "Status", "Algorithm", "Key Length", "Details"],
            rows,
        )
        self.display_scan_summary(report)

    def display_scan_summary(self, report: ScanReport) -> None:
        ratio = f"{report.secure_count}/{report.ports_scanned}"
        if report.ports_scanned and report.secure_count == 0:
            secure_cell = f"[kl.error][{_ERROR_SYMBOL}] {ratio}[/kl.error]"
        elif report.secure_count < report.ports_scanned:
            secure_cell = f"[kl.warning][{_WARNING_SYMBOL}] {ratio}[/kl.warning]"
        else:
            secure_cell = f"[kl.success][{_SECURE_SYMBOL}] {ratio}[/kl.success]"

        self.console.print()
        self.console.print("Scan Summary:")
        self.console.print(f"  Host: [bold]{report.host}[/bold]")
        self.console.print(f"  Ports Scanned: [bold]{report.ports_scanned}[/bold]")
        self.console.print(f"  Evaluated Ports: [bold]{report.evaluated_count}[/bold]")
        self.console.print(f"  Secure Ports: {secure_cell}")

    def display_standards(self, standards: Mapping[str, Standard]) -> None:
        rows = [
            (
                name,
                standard.rsa_bits,
                standard.ecc_bits,
                standard.symmetric_bits,
                standard.cutoff_year if standard.cutoff_year is not None else "-",
            )
            for name, standard in standards.items()
        ]
        self.console.table(
            "Security Standards",
            ["Standard", "RSA", "ECC", "Symmetric", "Cutoff Year"],
            rows,
        )

    def display_recommendations(self, year: int, lengths: Mapping[str, int]) -> None:
        rows = [(algorithm, f"{bits} bits") for algorithm, bits in lengths.items()]
        self.console.table(
            f"Recommended Minimum Key Lengths ({year})",
            ["Algorithm", "Length"],
            rows,
        )
