import pytest
from cryptography.hazmat.primitives import serialization

from conftest import make_certificate
from keycheck.analyzers import ECCKey, KeyMaterial, RSAKey, SymmetricKey
from keycheck.core.errors import UnsupportedKeyFormatError, WrongAlgorithmInEnvelopeError


def _spki_der(key) -> bytes:
    return key.public_key().public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )


# ===================================================================== #
#  RSA
# ===================================================================== #


def test_rsa_length_from_every_form(rsa_2048, rsa_cert):
    private_der = rsa_2048.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    )
    for key in (
        RSAKey.from_public_der(_spki_der(rsa_2048)),
        RSAKey.from_private_der(private_der),
        RSAKey.from_certificate(rsa_cert),
        RSAKey(public_key=rsa_2048.public_key()),
    ):
        assert key.get_length() == 2048
        assert key.get_algorithm() == "RSA"


def test_rsa_is_secure_is_monotonic(rsa_2048):
    key = RSAKey(public_key=rsa_2048.public_key())
    assert key.is_secure(1024)
    assert key.is_secure(2048)
    assert not key.is_secure(2049)
    assert not key.is_secure(3072)


@pytest.mark.parametrize(
    "year, expected",
    [(2020, 2048), (2025, 2048), (2030, 2048), (2031, 3072), (2050, 3072), (2051, 4096), (2100, 4096)],
)
def test_rsa_adjust_for_year(year, expected):
    assert RSAKey().adjust_for_year(year) == expected


def test_rsa_construction_errors(ec_p256):
    with pytest.raises(UnsupportedKeyFormatError):
        RSAKey.from_public_der(b"garbage")
    with pytest.raises(UnsupportedKeyFormatError):
        RSAKey.from_private_der(b"garbage")
    with pytest.raises(WrongAlgorithmInEnvelopeError):
        RSAKey.from_public_der(_spki_der(ec_p256))


def test_rsa_certificate_with_ec_key_rejected(ec_p256):
    with pytest.raises(WrongAlgorithmInEnvelopeError):
        RSAKey.from_certificate(make_certificate(ec_p256))


def test_empty_rsa_key_has_zero_length():
    assert RSAKey().get_length() == 0


# ===================================================================== #
#  ECC
# ===================================================================== #


def test_ecc_length_from_public_key_and_certificate(ec_p256, ec_p384):
    assert ECCKey.from_public_der(_spki_der(ec_p256)).get_length() == 256
    assert ECCKey.from_public_der(_spki_der(ec_p384)).get_length() == 384

    key = ECCKey.from_certificate(make_certificate(ec_p384))
    assert key.get_length() == 384
    assert key.get_algorithm() == "ECC"


def test_ecc_without_curve_fails_every_positive_threshold():
    key = ECCKey()
    assert key.get_length() == 0
    assert not key.is_secure(1)
    assert key.is_secure(0)


@pytest.mark.parametrize(
    "year, expected",
    [(2025, 256), (2030, 256), (2031, 384), (2040, 384), (2041, 521)],
)
def test_ecc_adjust_for_year(year, expected):
    assert ECCKey().adjust_for_year(year) == expected


def test_ecc_envelope_carrying_rsa_key(rsa_1024):
    with pytest.raises(WrongAlgorithmInEnvelopeError, match="parsed key is RSA"):
        ECCKey.from_public_der(_spki_der(rsa_1024))


def test_ecc_certificate_with_rsa_key_rejected(rsa_cert):
    with pytest.raises(WrongAlgorithmInEnvelopeError):
        ECCKey.from_certificate(rsa_cert)


# ===================================================================== #
#  Symmetric
# ===================================================================== #


def test_symmetric_key_basics():
    key = SymmetricKey(128)
    assert key.get_algorithm() == "Symmetric"
    assert key.get_length() == 128
    assert key.is_secure(128)
    assert not key.is_secure(192)


def test_symmetric_negative_length_rejected():
    with pytest.raises(ValueError):
        SymmetricKey(-1)


@pytest.mark.parametrize(
    "year, expected",
    [(2020, 128), (2025, 128), (2026, 128), (2027, 129), (2035, 134), (2125, 195)],
)
def test_symmetric_adjust_for_year(year, expected):
    assert SymmetricKey(0).adjust_for_year(year) == expected


def test_variants_satisfy_protocol(rsa_1024):
    for key in (RSAKey(public_key=rsa_1024.public_key()), ECCKey(), SymmetricKey(256)):
        assert isinstance(key, KeyMaterial)
