"""
PEM Envelope Decoder
=====================

Locates the first PEM envelope in a byte string and returns its label and
base64-decoded payload.

The decoder mirrors RFC 7468 "lax" parsing: whitespace inside the body is
ignored, RFC 1421 style header lines (``Proc-Type: ...``) are skipped, and
a block whose body is not valid base64 is passed over in favour of the
next one.

References:
    - Josefsson, S. & Leonard, S. (2015). RFC 7468 -- Textual Encodings
      of PKIX, PKCS, and CMS Structures.
    - Linn, J. (1993). RFC 1421 -- Privacy Enhancement for Internet
      Electronic Mail.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Iterator, Optional

# RFC 7468 label: printable ASCII except "-", single inner spaces or hyphens
_LABEL_CHAR = rb"[\x21-\x2C\x2E-\x7E]"

_PEM_BLOCK_PATTERN = re.compile(
    rb"-----BEGIN (?P<label>" + _LABEL_CHAR + rb"(?:[- ]?" + _LABEL_CHAR + rb")*)-----"
    rb"(?P<body>.*?)"
    rb"-----END (?P=label)-----",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class PEMBlock:
    """A decoded PEM envelope.

    Attributes:
        label: Type label between ``BEGIN`` and the dashes, e.g. "CERTIFICATE".
        payload: DER bytes carried by the envelope.
    """

    label: str
    payload: bytes


def _decode_body(body: bytes) -> Optional[bytes]:
    lines = [line.strip() for line in body.splitlines()]
    encoded = b"".join(line for line in lines if line and b":" not in line)
    if not encoded:
        return None
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None


def iter_pem_blocks(data: bytes) -> Iterator[PEMBlock]:
    """Yield every well-formed PEM block in *data*, in order."""
    for match in _PEM_BLOCK_PATTERN.finditer(data):
        payload = _decode_body(match.group("body"))
        if payload is None:
            continue
        yield PEMBlock(label=match.group("label").decode("ascii"), payload=payload)


def decode_pem(data: bytes) -> Optional[PEMBlock]:
    """Return the first well-formed PEM block in *data*, or ``None``."""
    return next(iter_pem_blocks(data), None)
