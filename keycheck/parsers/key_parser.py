"""
Key Parser
===========

Turns raw PEM or DER bytes into a typed key-material variant.

Dispatch happens in two explicit levels:

1. PEM envelope label::

       RSA PUBLIC KEY / RSA PRIVATE KEY  -> RSAKey
       EC PUBLIC KEY                     -> ECCKey
       CERTIFICATE                       -> level 2
       anything else                     -> UnsupportedPEMTypeError

2. Certificate public-key algorithm::

       RSA    -> RSAKey
       ECDSA  -> ECCKey
       other  -> UnsupportedCertificateAlgorithmError

Bytes without a PEM envelope are tried as a DER certificate and go straight
to level 2. Parsing is a pure transformation: no retries, no shared state.

References:
    - Cooper, D. et al. (2008). RFC 5280 -- Internet X.509 PKI.
    - Josefsson, S. & Leonard, S. (2015). RFC 7468 -- Textual Encodings
      of PKIX, PKCS, and CMS Structures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from cryptography import x509

from keycheck.analyzers.ecc_key import ECCKey
from keycheck.analyzers.rsa_key import RSAKey
from keycheck.core.certificates import certificate_key_algorithm, load_der_certificate
from keycheck.core.errors import (
    NilInputError,
    UnrecognizedFormatError,
    UnreadableInputError,
    UnsupportedCertificateAlgorithmError,
    UnsupportedKeyFormatError,
    UnsupportedPEMTypeError,
)
from keycheck.core.pem import decode_pem

ParsedKey = Union[RSAKey, ECCKey]

SUPPORTED_PEM_TYPES: tuple[str, ...] = (
    "RSA PUBLIC KEY",
    "RSA PRIVATE KEY",
    "EC PUBLIC KEY",
    "CERTIFICATE",
)


class KeyParser:
    """Parses key files and certificates into key material.

    Usage::

        parser = KeyParser()
        key = parser.parse(Path("server.crt").read_bytes())
        print(key.get_algorithm(), key.get_length())
    """

    def parse(self, data: Optional[bytes]) -> ParsedKey:
        """Parse *data* into an :class:`RSAKey` or :class:`ECCKey`.

        Args:
            data: Raw file or certificate bytes.

        Returns:
            The key-material variant matching the input.

        Raises:
            ParseError: One of the ParseError subclasses describing why the
                input could not be turned into key material.
        """
        if data is None:
            raise NilInputError()

        block = decode_pem(data)
        if block is not None:
            return self._parse_pem_block(block.label, block.payload)

        certificate = load_der_certificate(data)
        if certificate is not None:
            return self._key_from_certificate(certificate)

        raise UnrecognizedFormatError()

    def parse_file(self, file_path: Union[str, Path]) -> ParsedKey:
        """Read *file_path* and parse its contents unchanged."""
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise UnreadableInputError(str(path), str(exc)) from exc
        return self.parse(data)

    # ------------------------------------------------------------------ #
    #  Dispatch levels
    # ------------------------------------------------------------------ #

    def _parse_pem_block(self, label: str, payload: bytes) -> ParsedKey:
        if label not in SUPPORTED_PEM_TYPES:
            raise UnsupportedPEMTypeError(label)
        if label == "RSA PUBLIC KEY":
            return RSAKey.from_public_der(payload)
        if label == "RSA PRIVATE KEY":
            return RSAKey.from_private_der(payload)
        if label == "EC PUBLIC KEY":
            return ECCKey.from_public_der(payload)
        certificate = load_der_certificate(payload)
        if certificate is None:
            raise UnsupportedKeyFormatError("failed to parse PEM certificate")
        return self._key_from_certificate(certificate)

    @staticmethod
    def _key_from_certificate(certificate: x509.Certificate) -> ParsedKey:
        algorithm = certificate_key_algorithm(certificate)
        if algorithm == "RSA":
            return RSAKey.from_certificate(certificate)
        if algorithm == "ECDSA":
            return ECCKey.from_certificate(certificate)
        raise UnsupportedCertificateAlgorithmError(algorithm)
