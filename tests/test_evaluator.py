from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from conftest import NOW, cert_der, cert_pem, make_certificate
from keycheck.analyzers import RSAKey, SymmetricKey
from keycheck.core.evaluator import EvaluationEngine
from keycheck.core.standards import StandardsCatalog


@pytest.fixture()
def catalog(standards_file: Path):
    return StandardsCatalog.from_file(standards_file)


def test_rsa_2048_secure_under_nist(catalog, rsa_cert):
    key = RSAKey(certificate=rsa_cert)
    result = EvaluationEngine().evaluate(key, catalog.select("NIST"), now=NOW)

    assert result.algorithm == "RSA"
    assert result.length == 2048
    assert result.threshold == 2048
    assert result.secure is True
    assert result.status == "Secure (NIST)"
    assert result.recommended_length == 2048
    assert result.expiry is None
    assert result.expiry_warning is None


def test_rsa_2048_insecure_against_3072(catalog, rsa_cert):
    key = RSAKey(certificate=rsa_cert)
    result = EvaluationEngine().evaluate(key, catalog.select("STRICT"), now=NOW)
    assert result.secure is False
    assert result.status == "Insecure (STRICT)"


def test_cutoff_follows_evaluation_year(catalog, rsa_cert):
    key = RSAKey(certificate=rsa_cert)
    later = datetime(2031, 1, 1, tzinfo=timezone.utc)
    result = EvaluationEngine().evaluate(key, catalog.select("NIST"), now=later)
    assert result.threshold == 3072
    assert result.status == "Insecure (NIST)"
    assert result.recommended_length == 3072


def test_expiry_warning_inside_window(catalog, rsa_2048):
    cert = make_certificate(rsa_2048, not_after=NOW + timedelta(days=30))
    result = EvaluationEngine().evaluate(
        RSAKey(certificate=cert), catalog.select("NIST"), cert_pem(cert), now=NOW
    )
    assert result.expiry == (NOW + timedelta(days=30)).strftime("%Y-%m-%d")
    assert result.days_remaining == 30
    assert result.expiry_warning == (
        "Warning: Certificate expires in 30 days (threshold: 90 days)"
    )


def test_no_warning_outside_window(catalog, rsa_2048):
    cert = make_certificate(rsa_2048, not_after=NOW + timedelta(days=200))
    result = EvaluationEngine().evaluate(
        RSAKey(certificate=cert), catalog.select("NIST"), cert_der(cert), now=NOW
    )
    assert result.expiry == "2025-12-18"
    assert result.days_remaining == 200
    assert result.expiry_warning is None


def test_expired_certificate_reports_negative_days(catalog, rsa_2048):
    cert = make_certificate(
        rsa_2048,
        not_before=NOW - timedelta(days=400),
        not_after=NOW - timedelta(days=5),
    )
    result = EvaluationEngine().evaluate(
        RSAKey(certificate=cert), catalog.select("NIST"), cert_pem(cert), now=NOW
    )
    assert result.days_remaining == -5
    assert "expires in -5 days" in result.expiry_warning


def test_custom_warning_window(catalog, rsa_2048):
    cert = make_certificate(rsa_2048, not_after=NOW + timedelta(days=200))
    result = EvaluationEngine(expiry_warning_days=365).evaluate(
        RSAKey(certificate=cert), catalog.select("NIST"), cert_pem(cert), now=NOW
    )
    assert result.expiry_warning == (
        "Warning: Certificate expires in 200 days (threshold: 365 days)"
    )


def test_undecodable_certificate_leaves_expiry_empty(catalog):
    result = EvaluationEngine().evaluate(
        SymmetricKey(128), catalog.select("NIST"), b"not a certificate", now=NOW
    )
    assert result.status == "Secure (NIST)"
    assert result.expiry is None
    assert result.days_remaining is None


def test_symmetric_evaluation(catalog):
    result = EvaluationEngine().evaluate(SymmetricKey(64), catalog.select("NIST"), now=NOW)
    assert result.algorithm == "Symmetric"
    assert result.threshold == 128
    assert result.status == "Insecure (NIST)"
