import base64
import socket
import ssl
import sys
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import NameOID

# Make the flat-layout packages importable without an install.
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def pem_wrap(label: str, der: bytes) -> bytes:
    """Wrap DER bytes in a PEM envelope with an arbitrary label."""
    body = base64.encodebytes(der).decode("ascii").replace("\n", "")
    lines = [body[i:i + 64] for i in range(0, len(body), 64)]
    text = f"-----BEGIN {label}-----\n" + "\n".join(lines) + f"\n-----END {label}-----\n"
    return text.encode("ascii")


def make_certificate(key, not_after=None, not_before=None, common_name="localhost"):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    not_after = not_after or NOW + timedelta(days=365)
    not_before = not_before or NOW - timedelta(days=1)
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
    )
    algorithm = None if isinstance(key, ed25519.Ed25519PrivateKey) else hashes.SHA256()
    return builder.sign(key, algorithm)


def cert_pem(cert) -> bytes:
    return cert.public_bytes(serialization.Encoding.PEM)


def cert_der(cert) -> bytes:
    return cert.public_bytes(serialization.Encoding.DER)


def rsa_public_pem(key) -> bytes:
    """``RSA PUBLIC KEY`` envelope (PKCS#1)."""
    return key.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.PKCS1
    )


def rsa_private_pem(key) -> bytes:
    """``RSA PRIVATE KEY`` envelope (PKCS#1, unencrypted)."""
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    )


def ec_public_pem(key) -> bytes:
    """``EC PUBLIC KEY`` envelope around a SubjectPublicKeyInfo."""
    der = key.public_key().public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    return pem_wrap("EC PUBLIC KEY", der)


@pytest.fixture(scope="session")
def rsa_2048():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_1024():
    return rsa.generate_private_key(public_exponent=65537, key_size=1024)


@pytest.fixture(scope="session")
def ec_p256():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_p384():
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def ed25519_key():
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def rsa_cert(rsa_2048):
    return make_certificate(rsa_2048)


@pytest.fixture()
def standards_file(tmp_path: Path) -> Path:
    path = tmp_path / "standards.json"
    path.write_text(
        """
        {
          "standards": {
            "NIST": {"RSA": 2048, "ECC": 256, "Symmetric": 128, "cut_off_year": 2030},
            "STRICT": {"RSA": 3072, "ECC": 384, "Symmetric": 256},
            "LEGACY": {"RSA": 1024, "ECC": 160, "Symmetric": 80, "cut_off_year": 2010}
          }
        }
        """,
        encoding="utf-8",
    )
    return path


def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture()
def tls_server(tmp_path: Path, rsa_2048, rsa_cert):
    """Loopback TLS server presenting the 2048-bit RSA certificate.

    Yields the listening port.
    """
    cert_path = tmp_path / "server.crt"
    key_path = tmp_path / "server.key"
    cert_path.write_bytes(cert_pem(rsa_cert))
    key_path.write_bytes(rsa_private_pem(rsa_2048))

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(str(cert_path), str(key_path))

    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(5)
    listener.settimeout(0.1)
    port = listener.getsockname()[1]
    stop = threading.Event()

    def serve():
        while not stop.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            conn.settimeout(2)
            try:
                with context.wrap_socket(conn, server_side=True) as tls_conn:
                    tls_conn.recv(1)
            except OSError:
                # Client hung up after reading the certificate
                conn.close()

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield port
    finally:
        stop.set()
        thread.join(timeout=2)
        listener.close()
