import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import cert_pem, closed_port, rsa_public_pem
from keycheck.cli import cli


@pytest.fixture()
def runner():
    return CliRunner()


def _run_json(runner, tmp_path: Path, *args):
    out = tmp_path / "report.json"
    result = runner.invoke(cli, ["-q", "-o", "json", "-f", str(out), *args], obj={})
    assert result.exit_code == 0, result.output
    return json.loads(out.read_text(encoding="utf-8"))


def test_scan_certificate_json(runner, tmp_path: Path, rsa_cert):
    cert_path = tmp_path / "server.crt"
    cert_path.write_bytes(cert_pem(rsa_cert))

    report = _run_json(runner, tmp_path, "scan", str(cert_path), "--check-expiry")
    assert report["report_metadata"]["kind"] == "key_evaluation"
    assert report["result"]["algorithm"] == "RSA"
    assert report["result"]["length"] == 2048
    assert report["result"]["standard"] == "NIST"
    assert report["result"]["expiry"] is not None


def test_scan_with_custom_standards_file(runner, tmp_path: Path, standards_file: Path, rsa_2048):
    key_path = tmp_path / "key.pem"
    key_path.write_bytes(rsa_public_pem(rsa_2048))

    report = _run_json(
        runner, tmp_path, "--standards-file", str(standards_file), "scan", str(key_path), "-s", "STRICT"
    )
    assert report["result"]["status"] == "Insecure (STRICT)"


def test_scan_console_output(runner, tmp_path: Path, rsa_cert):
    cert_path = tmp_path / "server.crt"
    cert_path.write_bytes(cert_pem(rsa_cert))
    result = runner.invoke(cli, ["scan", str(cert_path)], obj={})
    assert result.exit_code == 0, result.output
    assert "Secure (NIST)" in result.output
    assert "2048 bits" in result.output


def test_scan_unparseable_file_exits_nonzero(runner, tmp_path: Path):
    bad = tmp_path / "bad.bin"
    bad.write_bytes(b"not a key")
    result = runner.invoke(cli, ["scan", str(bad)], obj={})
    assert result.exit_code == 1
    assert "unrecognized key format" in result.output


def test_unknown_standard_exits_nonzero(runner, tmp_path: Path, rsa_cert):
    cert_path = tmp_path / "server.crt"
    cert_path.write_bytes(cert_pem(rsa_cert))
    result = runner.invoke(cli, ["scan", str(cert_path), "-s", "NOPE"], obj={})
    assert result.exit_code == 1
    assert "invalid standard: NOPE" in result.output


def test_symmetric(runner, tmp_path: Path):
    report = _run_json(runner, tmp_path, "symmetric", "64")
    assert report["result"]["algorithm"] == "Symmetric"
    assert report["result"]["status"] == "Insecure (NIST)"


def test_standards_listing(runner):
    result = runner.invoke(cli, ["standards"], obj={})
    assert result.exit_code == 0, result.output
    for name in ("NIST", "BSI", "ANSSI", "ECRYPT"):
        assert name in result.output


def test_recommend_for_year(runner):
    result = runner.invoke(cli, ["-q", "-o", "json", "recommend", "--year", "2035"], obj={})
    assert result.exit_code == 0, result.output
    assert '"RSA": 3072' in result.output
    assert '"ECC": 384' in result.output
    assert '"Symmetric": 134' in result.output


def test_tls_scan_reports_each_port(runner, tmp_path: Path, tls_server):
    ports = f"{tls_server},{closed_port()}"
    report = _run_json(
        runner, tmp_path, "tls", "https://127.0.0.1/ignored", "--ports", ports, "-t", "3s"
    )
    assert report["report_metadata"]["kind"] == "tls_scan"
    assert report["result"]["host"] == "127.0.0.1"
    statuses = [row["status"] for row in report["result"]["results"]]
    assert statuses[0].startswith("Secure") or statuses[0].startswith("Insecure")
    assert statuses[1] == "Connection Failed"
    assert report["result"]["ports_scanned"] == 2
    assert report["result"]["evaluated_count"] == 1


def test_config_file_sets_defaults(runner, tmp_path: Path):
    config = tmp_path / "config.toml"
    config.write_text('[keycheck]\nstandard = "BSI"\n')
    report = _run_json(runner, tmp_path, "-c", str(config), "symmetric", "128")
    assert report["result"]["standard"] == "BSI"
