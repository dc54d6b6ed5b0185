"""
KeyCheck Core Data Models
==========================

Pydantic models for the KeyCheck evaluation engine. These models describe
the configured security standards, the verdict produced for one piece of
key material, and the per-port rows aggregated by a TLS scan.

All result models are frozen: they are created fresh per evaluation and
never mutated afterwards. Every model serialises to JSON for the report
generator.

References:
    - NIST SP 800-57 Part 1 Rev. 5 (2020). Recommendation for Key Management.
    - NIST SP 800-131A Rev. 2 (2019). Transitioning the Use of
      Cryptographic Algorithms and Key Lengths.
    - BSI TR-02102-1 (2024). Cryptographic Mechanisms: Recommendations
      and Key Lengths.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


# ===================================================================== #
#  Standards
# ===================================================================== #


class Standard(BaseModel):
    """Minimum key lengths mandated by one named security standard.

    Attributes:
        rsa_bits: Minimum RSA modulus size (JSON key ``RSA``).
        ecc_bits: Minimum elliptic-curve size (JSON key ``ECC``).
        symmetric_bits: Minimum symmetric key size (JSON key ``Symmetric``).
        cutoff_year: Year after which the configured RSA minimum is
            considered stale (JSON key ``cut_off_year``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    rsa_bits: StrictInt = Field(..., alias="RSA", ge=0)
    ecc_bits: StrictInt = Field(..., alias="ECC", ge=0)
    symmetric_bits: StrictInt = Field(..., alias="Symmetric", ge=0)
    cutoff_year: Optional[StrictInt] = Field(default=None, alias="cut_off_year")


class StandardsFile(BaseModel):
    """Shape of the standards configuration file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    standards: dict[str, Standard]


# ===================================================================== #
#  Evaluation results
# ===================================================================== #


class EvaluationResult(BaseModel):
    """Verdict for a single piece of key material.

    Attributes:
        algorithm: Algorithm family ("RSA", "ECC", "Symmetric").
        length: Measured key length in bits.
        status: ``"Secure (<standard>)"`` or ``"Insecure (<standard>)"``.
        standard: Name of the standard the key was judged against.
        threshold: Minimum length required by that standard.
        secure: Whether ``length >= threshold``.
        recommended_length: Year-adjusted recommendation for the algorithm.
        expiry: Certificate NotAfter date (``YYYY-MM-DD``), if inspected.
        expiry_warning: Warning text when the certificate expires soon.
        days_remaining: Whole days of validity left, if inspected.
    """

    model_config = ConfigDict(frozen=True)

    algorithm: str
    length: int
    status: str
    standard: str = ""
    threshold: int = 0
    secure: bool = False
    recommended_length: int = 0
    expiry: Optional[str] = None
    expiry_warning: Optional[str] = None
    days_remaining: Optional[int] = None


class PortScanResult(BaseModel):
    """Outcome of inspecting one ``host:port`` endpoint.

    Attributes:
        port: Port string as supplied by the caller.
        status: Verdict status, or one of "Connection Failed",
            "No Certificate", "Parsing Failed".
        algorithm: Algorithm of the leaf certificate key.
        length: Key length in bits.
        detail: Error text or expiry information.
        secure: Verdict when the certificate was evaluated, else ``None``.
    """

    model_config = ConfigDict(frozen=True)

    port: str
    status: str
    algorithm: str = ""
    length: int = 0
    detail: str = ""
    secure: Optional[bool] = None
    expiry: Optional[str] = None
    expiry_warning: Optional[str] = None


class ScanReport(BaseModel):
    """Ordered per-port results for one host plus aggregate counters.

    Attributes:
        host: Normalised hostname that was scanned.
        standard: Standard the certificates were judged against.
        results: One row per input port, in input order.
        evaluated_count: Ports whose certificate was parsed and evaluated.
        secure_count: Evaluated ports judged secure.
    """

    model_config = ConfigDict(frozen=True)

    host: str
    standard: str
    results: list[PortScanResult] = Field(default_factory=list)
    evaluated_count: int = 0
    secure_count: int = 0

    @property
    def ports_scanned(self) -> int:
        """Number of ports attempted, successful or not."""
        return len(self.results)
