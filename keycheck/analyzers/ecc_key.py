"""
Elliptic-Curve Key Material
============================

Measures the nominal size of the curve behind an EC public key, either
standalone (``EC PUBLIC KEY`` envelope) or inside an X.509 certificate.

Curve sizes for the NIST prime curves:

    ==========  =========
    Curve       Key size
    ==========  =========
    P-256       256
    P-384       384
    P-521       521
    ==========  =========

A key with no resolvable curve reports length 0, which fails every
positive threshold.

References:
    - NIST FIPS 186-5 (2023). Digital Signature Standard.
    - SEC 2 v2 (2010). Recommended Elliptic Curve Domain Parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from keycheck.core.errors import UnsupportedKeyFormatError, WrongAlgorithmInEnvelopeError
from keycheck.core.certificates import certificate_key_algorithm, describe_public_key


@dataclass(frozen=True, slots=True)
class ECCKey:
    """Elliptic-curve key material.

    Usage::

        key = ECCKey.from_certificate(certificate)
        key.get_length()          # 384
        key.adjust_for_year(2035) # 384
    """

    public_key: Optional[ec.EllipticCurvePublicKey] = None
    certificate: Optional[x509.Certificate] = None

    ALGORITHM: ClassVar[str] = "ECC"

    @classmethod
    def from_public_der(cls, payload: bytes) -> ECCKey:
        """Decode a DER SubjectPublicKeyInfo that must carry an EC key."""
        try:
            public_key = serialization.load_der_public_key(payload)
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise UnsupportedKeyFormatError(
                f"failed to parse EC public key: {exc}"
            ) from exc
        if not isinstance(public_key, ec.EllipticCurvePublicKey):
            raise WrongAlgorithmInEnvelopeError("ECDSA", describe_public_key(public_key))
        return cls(public_key=public_key)

    @classmethod
    def from_certificate(cls, certificate: x509.Certificate) -> ECCKey:
        algorithm = certificate_key_algorithm(certificate)
        if algorithm != "ECDSA":
            raise WrongAlgorithmInEnvelopeError("ECDSA", algorithm)
        return cls(certificate=certificate)

    def _curve(self) -> Optional[ec.EllipticCurve]:
        if self.certificate is not None:
            cert_key = self.certificate.public_key()
            if isinstance(cert_key, ec.EllipticCurvePublicKey):
                return cert_key.curve
        if self.public_key is not None:
            return self.public_key.curve
        return None

    def get_length(self) -> int:
        curve = self._curve()
        if curve is None:
            return 0
        return curve.key_size

    def get_algorithm(self) -> str:
        return self.ALGORITHM

    def is_secure(self, threshold: int) -> bool:
        return self.get_length() >= threshold

    def adjust_for_year(self, year: int) -> int:
        if year <= 2030:
            return 256
        if year <= 2040:
            return 384
        return 521
