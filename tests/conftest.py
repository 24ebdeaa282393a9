"""
Shared pytest fixtures for image translation tests.

Fixtures provided:
- rsa_key / ec_key / ed25519_key: Generated private keys (session scoped)
- make_cert: Factory for self-signed certificates
- pem: Helpers for rendering keys and certificates as PEM text
- restore_root_logging: Restores root logger handlers after tests that call setup_logging
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import NameOID


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ed25519_key():
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def make_cert():
    """
    Factory for self-signed certificates.

    Usage: make_cert(key, "client.example.com")
    """
    def _make_cert(key, common_name: str = "test.example.com") -> x509.Certificate:
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        now = datetime.now(timezone.utc)
        algorithm = None if isinstance(key, ed25519.Ed25519PrivateKey) else hashes.SHA256()
        return (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now - timedelta(days=1))
            .not_valid_after(now + timedelta(days=30))
            .sign(key, algorithm)
        )

    return _make_cert


class PemHelper:
    """Renders keys in the encodings seen in transport profiles"""

    @staticmethod
    def _key(key, encoding, fmt):
        return key.private_bytes(encoding, fmt, serialization.NoEncryption())

    def pkcs1(self, key) -> str:
        """'RSA PRIVATE KEY' (or 'EC PRIVATE KEY' for EC keys)"""
        return self._key(key, serialization.Encoding.PEM, serialization.PrivateFormat.TraditionalOpenSSL).decode()

    def pkcs8(self, key) -> str:
        """'PRIVATE KEY'"""
        return self._key(key, serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8).decode()

    def sec1(self, key) -> str:
        """'EC PRIVATE KEY'"""
        return self.pkcs1(key)

    def pkcs1_der(self, key) -> bytes:
        return self._key(key, serialization.Encoding.DER, serialization.PrivateFormat.TraditionalOpenSSL)

    def pkcs8_der(self, key) -> bytes:
        return self._key(key, serialization.Encoding.DER, serialization.PrivateFormat.PKCS8)

    def sec1_der(self, key) -> bytes:
        return self.pkcs1_der(key)

    def cert(self, certificate: x509.Certificate) -> str:
        return certificate.public_bytes(serialization.Encoding.PEM).decode()


@pytest.fixture(scope="session")
def pem():
    return PemHelper()


@pytest.fixture
def restore_root_logging():
    """Put root logger handlers and level back after the test"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
