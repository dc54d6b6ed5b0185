"""
RSA Key Material
=================

Measures the modulus size of an RSA key carried by a standalone public
key, a PKCS#1 private key, or an X.509 certificate.

Year-adjusted recommendation follows the NIST SP 800-57 Table 4 schedule:
2048 bits through 2030, 3072 bits through 2050, 4096 bits afterwards.

References:
    - NIST SP 800-57 Part 1 Rev. 5 (2020). Recommendation for Key Management.
    - Moriarty, K. et al. (2016). RFC 8017 -- PKCS #1: RSA Cryptography
      Specifications Version 2.2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from keycheck.core.errors import UnsupportedKeyFormatError, WrongAlgorithmInEnvelopeError
from keycheck.core.certificates import certificate_key_algorithm, describe_public_key

# (last year, recommended modulus bits), ascending
_YEAR_SCHEDULE: tuple[tuple[int, int], ...] = (
    (2030, 2048),
    (2050, 3072),
)
_FINAL_BITS = 4096


@dataclass(frozen=True, slots=True)
class RSAKey:
    """RSA key material.

    Exactly one of the decoded forms is normally present; when several
    are, the certificate wins, then the public key, then the private key.

    Usage::

        key = RSAKey.from_certificate(certificate)
        key.get_length()          # 2048
        key.is_secure(3072)       # False
    """

    public_key: Optional[rsa.RSAPublicKey] = None
    private_key: Optional[rsa.RSAPrivateKey] = None
    certificate: Optional[x509.Certificate] = None

    ALGORITHM: ClassVar[str] = "RSA"

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_public_der(cls, payload: bytes) -> RSAKey:
        """Decode a DER public key (SubjectPublicKeyInfo or PKCS#1)."""
        try:
            public_key = serialization.load_der_public_key(payload)
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise UnsupportedKeyFormatError(
                f"failed to parse RSA public key: {exc}"
            ) from exc
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise WrongAlgorithmInEnvelopeError("RSA", describe_public_key(public_key))
        return cls(public_key=public_key)

    @classmethod
    def from_private_der(cls, payload: bytes) -> RSAKey:
        """Decode an unencrypted DER private key (PKCS#1 or PKCS#8)."""
        try:
            private_key = serialization.load_der_private_key(payload, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise UnsupportedKeyFormatError(
                f"failed to parse RSA private key: {exc}"
            ) from exc
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise WrongAlgorithmInEnvelopeError("RSA", describe_public_key(private_key))
        return cls(private_key=private_key)

    @classmethod
    def from_certificate(cls, certificate: x509.Certificate) -> RSAKey:
        """Wrap a certificate whose subject key is RSA."""
        algorithm = certificate_key_algorithm(certificate)
        if algorithm != "RSA":
            raise WrongAlgorithmInEnvelopeError("RSA", algorithm)
        return cls(certificate=certificate)

    # ------------------------------------------------------------------ #
    #  Capability set
    # ------------------------------------------------------------------ #

    def get_length(self) -> int:
        if self.certificate is not None:
            cert_key = self.certificate.public_key()
            if isinstance(cert_key, rsa.RSAPublicKey):
                return cert_key.key_size
        if self.public_key is not None:
            return self.public_key.key_size
        if self.private_key is not None:
            return self.private_key.public_key().key_size
        return 0

    def get_algorithm(self) -> str:
        return self.ALGORITHM

    def is_secure(self, threshold: int) -> bool:
        return self.get_length() >= threshold

    def adjust_for_year(self, year: int) -> int:
        """Recommended RSA modulus size for *year*.

        >>> RSAKey().adjust_for_year(2030)
        2048
        >>> RSAKey().adjust_for_year(2031)
        3072
        """
        for last_year, bits in _YEAR_SCHEDULE:
            if year <= last_year:
                return bits
        return _FINAL_BITS
