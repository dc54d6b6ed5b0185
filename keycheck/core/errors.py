"""
KeyCheck Error Taxonomy
========================

Exception hierarchy raised by the KeyCheck core. Three families exist:

- :class:`ConfigError` -- the standards catalog could not be loaded or the
  requested standard does not exist. Fatal to the requested operation.
- :class:`ParseError` -- a single key or certificate could not be decoded.
  Fatal for that input only; in scan mode it is isolated per port.
- :class:`TLSConnectionError` -- a TLS endpoint could not be reached or
  inspected. Always recorded as a result row, never propagated past the
  scan orchestrator.
"""

from __future__ import annotations


class KeyCheckError(Exception):
    """Base class for every error raised by the KeyCheck core."""

    pass


# ===================================================================== #
#  Configuration errors
# ===================================================================== #


class ConfigError(KeyCheckError):
    """The standards catalog could not be loaded or resolved."""

    pass


class EmptySourcePathError(ConfigError):
    def __init__(self) -> None:
        super().__init__("standards file path cannot be empty")


class UnreadableSourceError(ConfigError):
    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"failed to read standards file {source!r}: {reason}")


class MalformedSourceError(ConfigError):
    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"failed to parse standards file {source!r}: {reason}")


class UnknownStandardError(ConfigError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid standard: {name}")


# ===================================================================== #
#  Parse errors
# ===================================================================== #


class ParseError(KeyCheckError):
    """A key or certificate could not be turned into key material."""

    pass


class NilInputError(ParseError):
    def __init__(self) -> None:
        super().__init__("data cannot be nil")


class UnreadableInputError(ParseError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"failed to read file {path!r}: {reason}")


class UnrecognizedFormatError(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "unrecognized key format: expected a PEM envelope or a DER certificate"
        )


class UnsupportedPEMTypeError(ParseError):
    def __init__(self, pem_type: str) -> None:
        self.pem_type = pem_type
        super().__init__(f"unsupported PEM block type: {pem_type}")


class UnsupportedCertificateAlgorithmError(ParseError):
    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"unsupported key algorithm in certificate: {algorithm}")


class UnsupportedKeyFormatError(ParseError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"unsupported key format: {detail}")


class WrongAlgorithmInEnvelopeError(ParseError):
    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"parsed key is {actual}, expected {expected}")


# ===================================================================== #
#  Connection errors
# ===================================================================== #


class TLSConnectionError(KeyCheckError):
    """Dialling or handshaking with a TLS endpoint failed."""

    def __init__(self, host: str, port: str, reason: str) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(reason)
