"""
Evaluation Engine
==================

Fuses parsed key material with the selected standard into an
:class:`~keycheck.core.models.EvaluationResult`.

Verdict::

    threshold = standard.get_threshold(key.get_algorithm())
    secure    = key.get_length() >= threshold
    status    = "Secure (<name>)" | "Insecure (<name>)"

When certificate bytes (PEM or DER) accompany the key, the NotAfter date
is reported as ``YYYY-MM-DD`` and a warning is attached when fewer than
``expiry_warning_days`` whole days remain. A certificate that fails to
decode only leaves the expiry fields empty; the verdict still stands.

References:
    - NIST SP 800-57 Part 1 Rev. 5 (2020). Recommendation for Key Management.
    - Cooper, D. et al. (2008). RFC 5280 -- Internet X.509 PKI, 4.1.2.5 Validity.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from keycheck.analyzers.base import KeyMaterial
from keycheck.core.certificates import load_any_certificate
from keycheck.core.models import EvaluationResult
from keycheck.core.standards import SelectedStandard

DEFAULT_EXPIRY_WARNING_DAYS: int = 90

_SECONDS_PER_DAY = 86_400


def format_status(secure: bool, standard_name: str) -> str:
    verdict = "Secure" if secure else "Insecure"
    return f"{verdict} ({standard_name})"


class EvaluationEngine:
    """Judges key material against a standard.

    Stateless apart from the warning window; one instance can serve any
    number of evaluations.

    Usage::

        engine = EvaluationEngine()
        result = engine.evaluate(key, selected, cert_der)
        result.status          # "Secure (NIST)"
        result.expiry_warning  # None or "Warning: Certificate expires in ..."

    Args:
        expiry_warning_days: Days of remaining validity below which an
            expiry warning is attached.
    """

    def __init__(self, expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS) -> None:
        self.expiry_warning_days = expiry_warning_days

    def evaluate(
        self,
        key: KeyMaterial,
        standard: SelectedStandard,
        certificate_bytes: Optional[bytes] = None,
        *,
        now: Optional[datetime] = None,
    ) -> EvaluationResult:
        """Evaluate *key* against *standard*.

        Args:
            key: Parsed key material.
            standard: The selected standard.
            certificate_bytes: Optional PEM or DER certificate for the
                expiry check.
            now: Reference instant (timezone-aware); defaults to the
                current UTC time. Its year drives the cutoff check and the
                recommended length.

        Returns:
            A new :class:`EvaluationResult`.
        """
        now = now or datetime.now(timezone.utc)

        algorithm = key.get_algorithm()
        length = key.get_length()
        threshold = standard.get_threshold(algorithm, as_of_year=now.year)
        secure = length >= threshold

        expiry: Optional[str] = None
        warning: Optional[str] = None
        days_remaining: Optional[int] = None
        if certificate_bytes:
            expiry, warning, days_remaining = self._check_expiry(certificate_bytes, now)

        return EvaluationResult(
            algorithm=algorithm,
            length=length,
            status=format_status(secure, standard.name),
            standard=standard.name,
            threshold=threshold,
            secure=secure,
            recommended_length=key.adjust_for_year(now.year),
            expiry=expiry,
            expiry_warning=warning,
            days_remaining=days_remaining,
        )

    def _check_expiry(
        self, certificate_bytes: bytes, now: datetime
    ) -> tuple[Optional[str], Optional[str], Optional[int]]:
        certificate = load_any_certificate(certificate_bytes)
        if certificate is None:
            return None, None, None

        not_after = certificate.not_valid_after_utc
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        remaining = not_after - now
        # Truncate toward zero so an expired certificate reports negative days
        days_left = int(remaining.total_seconds() / _SECONDS_PER_DAY)

        warning: Optional[str] = None
        if remaining.total_seconds() < self.expiry_warning_days * _SECONDS_PER_DAY:
            warning = (
                f"Warning: Certificate expires in {days_left} days "
                f"(threshold: {self.expiry_warning_days} days)"
            )

        return not_after.strftime("%Y-%m-%d"), warning, days_left
