import re
from pathlib import Path

import pytest

from conftest import cert_der, cert_pem, ec_public_pem, make_certificate, pem_wrap, rsa_private_pem, rsa_public_pem
from keycheck.analyzers import ECCKey, RSAKey
from keycheck.core.errors import (
    NilInputError,
    ParseError,
    UnreadableInputError,
    UnrecognizedFormatError,
    UnsupportedCertificateAlgorithmError,
    UnsupportedKeyFormatError,
    UnsupportedPEMTypeError,
)
from keycheck.parsers import KeyParser


@pytest.fixture()
def parser():
    return KeyParser()


def test_nil_input(parser):
    with pytest.raises(NilInputError, match="data cannot be nil"):
        parser.parse(None)


def test_rsa_envelopes(parser, rsa_2048):
    public = parser.parse(rsa_public_pem(rsa_2048))
    private = parser.parse(rsa_private_pem(rsa_2048))
    assert isinstance(public, RSAKey) and public.get_length() == 2048
    assert isinstance(private, RSAKey) and private.private_key is not None


def test_ec_envelope(parser, ec_p256):
    key = parser.parse(ec_public_pem(ec_p256))
    assert isinstance(key, ECCKey)
    assert key.get_length() == 256


def test_certificate_dispatch_by_key_algorithm(parser, rsa_cert, ec_p384):
    assert isinstance(parser.parse(cert_pem(rsa_cert)), RSAKey)
    assert isinstance(parser.parse(cert_der(rsa_cert)), RSAKey)

    ec_cert = make_certificate(ec_p384)
    assert isinstance(parser.parse(cert_pem(ec_cert)), ECCKey)
    assert isinstance(parser.parse(cert_der(ec_cert)), ECCKey)


def test_pem_and_der_give_same_length(parser, rsa_cert):
    assert parser.parse(cert_pem(rsa_cert)).get_length() == parser.parse(cert_der(rsa_cert)).get_length()


def test_unsupported_certificate_algorithm(parser, ed25519_key):
    cert = make_certificate(ed25519_key)
    with pytest.raises(UnsupportedCertificateAlgorithmError, match="Ed25519"):
        parser.parse(cert_pem(cert))


def test_unsupported_pem_label(parser):
    data = pem_wrap("DSA PRIVATE KEY", b"\x30\x03\x02\x01\x00")
    with pytest.raises(UnsupportedPEMTypeError, match="DSA PRIVATE KEY"):
        parser.parse(data)


@pytest.mark.parametrize("label", ["Foo", "X9.42 DH PARAMETERS", "ENCRYPTED-PRIVATE KEY", "pkcs7/signed,data"])
def test_rfc7468_labels_reported_as_unsupported(parser, label):
    with pytest.raises(UnsupportedPEMTypeError, match=re.escape(label)):
        parser.parse(pem_wrap(label, b"\x30\x03\x02\x01\x00"))


def test_corrupt_certificate_payload(parser):
    with pytest.raises(UnsupportedKeyFormatError):
        parser.parse(pem_wrap("CERTIFICATE", b"\x30\x03\x02\x01\x00"))


def test_unrecognized_bytes(parser):
    with pytest.raises(UnrecognizedFormatError):
        parser.parse(b"definitely not a key")
    with pytest.raises(UnrecognizedFormatError):
        parser.parse(b"")


def test_pem_with_leading_text(parser, rsa_cert):
    data = b"subject=CN = localhost\nissuer=CN = localhost\n" + cert_pem(rsa_cert)
    assert parser.parse(data).get_length() == 2048


def test_parse_file(parser, tmp_path: Path, rsa_cert):
    path = tmp_path / "server.crt"
    path.write_bytes(cert_pem(rsa_cert))
    assert parser.parse_file(path).get_length() == 2048

    with pytest.raises(UnreadableInputError):
        parser.parse_file(tmp_path / "missing.crt")


def test_all_parse_errors_share_a_base(parser):
    with pytest.raises(ParseError):
        parser.parse(b"junk")
