import pytest

from keycheck.parsers import normalize_host, parse_duration, parse_ports


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("example.com", "example.com"),
        ("https://example.com", "example.com"),
        ("http://example.com/path/to?x=1", "example.com"),
        ("  HTTPS://Example.com/  ", "Example.com"),
        ("example.com/login", "example.com"),
    ],
)
def test_normalize_host(raw, expected):
    assert normalize_host(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ["443"]),
        ("", ["443"]),
        (" , ,", ["443"]),
        ("443", ["443"]),
        ("443, 8443 ,9443", ["443", "8443", "9443"]),
        ("8443,443", ["8443", "443"]),
    ],
)
def test_parse_ports(raw, expected):
    assert parse_ports(raw) == expected


@pytest.mark.parametrize(
    "raw, seconds",
    [
        ("5s", 5.0),
        ("250ms", 0.25),
        ("1m30s", 90.0),
        ("1.5h", 5400.0),
        ("0", 0.0),
    ],
)
def test_parse_duration(raw, seconds):
    assert parse_duration(raw) == pytest.approx(seconds)


@pytest.mark.parametrize("raw", ["", "5", "abc", "5x", "-5s", "s", "5s junk"])
def test_parse_duration_rejects(raw):
    assert parse_duration(raw) is None
