"""
Certificate Helpers
====================

Thin wrappers over :mod:`cryptography.x509` used by the key parser, the
key-material variants and the evaluation engine: DER/PEM certificate
loading and public-key algorithm naming.
"""

from __future__ import annotations

from typing import Any, Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import (
    dh,
    dsa,
    ec,
    ed448,
    ed25519,
    rsa,
    x448,
    x25519,
)

from keycheck.core.pem import iter_pem_blocks

# Public key classes and the algorithm tag reported for them
_PUBLIC_KEY_NAMES: tuple[tuple[type, str], ...] = (
    (rsa.RSAPublicKey, "RSA"),
    (ec.EllipticCurvePublicKey, "ECDSA"),
    (dsa.DSAPublicKey, "DSA"),
    (ed25519.Ed25519PublicKey, "Ed25519"),
    (ed448.Ed448PublicKey, "Ed448"),
    (x25519.X25519PublicKey, "X25519"),
    (x448.X448PublicKey, "X448"),
    (dh.DHPublicKey, "DH"),
)


def describe_public_key(key: Any) -> str:
    """Return the algorithm tag for a decoded public (or private) key."""
    if isinstance(key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)):
        key = key.public_key()
    for key_type, name in _PUBLIC_KEY_NAMES:
        if isinstance(key, key_type):
            return name
    return type(key).__name__


def certificate_key_algorithm(cert: x509.Certificate) -> str:
    """Return the public-key algorithm tag declared by *cert*.

    Keys that ``cryptography`` cannot decode are reported by the dotted
    OID of their SubjectPublicKeyInfo algorithm.
    """
    try:
        return describe_public_key(cert.public_key())
    except (ValueError, UnsupportedAlgorithm):
        return cert.public_key_algorithm_oid.dotted_string


def load_der_certificate(payload: bytes) -> Optional[x509.Certificate]:
    """Decode DER bytes as an X.509 certificate, or return ``None``."""
    try:
        return x509.load_der_x509_certificate(payload)
    except ValueError:
        return None


def load_any_certificate(data: Optional[bytes]) -> Optional[x509.Certificate]:
    """Decode the first certificate in *data*, whether PEM or DER."""
    if not data:
        return None
    for block in iter_pem_blocks(data):
        if block.label == "CERTIFICATE":
            return load_der_certificate(block.payload)
    return load_der_certificate(data)
