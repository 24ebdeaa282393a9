"""
Unit tests for TLS profile resolution.

Tests cover:
- Pairing certificates with the key from the same record
- First parseable key wins within a record
- No key sharing across records
- Bad certificate and key blocks are skipped, not raised
"""

import base64
import logging

from imagetranslation.models import CertRecord, TLSProfile
from imagetranslation.tls import resolve_tls_profile
from imagetranslation.types import KeyKind

BAD_CERT_PEM = (
    "-----BEGIN CERTIFICATE-----\n"
    + base64.b64encode(b"this is not DER").decode()
    + "\n-----END CERTIFICATE-----\n"
)


class TestResolveTLSProfile:
    """Test building TLSConfig from a TLS profile"""

    def test_copies_server_name_and_insecure(self):
        """serverName and insecure should be passed through"""
        tls = resolve_tls_profile(TLSProfile(server_name="registry.local", insecure=True))

        assert tls.server_name == "registry.local"
        assert tls.insecure is True
        assert tls.certificates == []

    def test_cert_paired_with_key(self, rsa_key, make_cert, pem):
        """Certificate should be paired with the record's key"""
        cert = make_cert(rsa_key, "client")
        profile = TLSProfile(certificates=[CertRecord(cert=pem.cert(cert), key=pem.pkcs1(rsa_key))])

        tls = resolve_tls_profile(profile, "secure")

        assert len(tls.certificates) == 1
        assert tls.certificates[0].certificate == cert
        assert tls.certificates[0].private_key.kind == KeyKind.RSA
        assert tls.certificates[0].private_key.key.private_numbers() == rsa_key.private_numbers()

    def test_cert_without_key(self, ec_key, make_cert, pem):
        """Certificate with no key material should have no private key"""
        cert = make_cert(ec_key)
        profile = TLSProfile(certificates=[CertRecord(cert=pem.cert(cert))])

        tls = resolve_tls_profile(profile)

        assert len(tls.certificates) == 1
        assert tls.certificates[0].private_key is None

    def test_all_certs_in_record_share_key(self, ec_key, rsa_key, make_cert, pem):
        """Every certificate of a record should get the same key"""
        chain = pem.cert(make_cert(ec_key, "leaf")) + pem.cert(make_cert(rsa_key, "intermediate"))
        profile = TLSProfile(certificates=[CertRecord(cert=chain, key=pem.sec1(ec_key))])

        tls = resolve_tls_profile(profile)

        assert len(tls.certificates) == 2
        assert tls.certificates[0].private_key is tls.certificates[1].private_key
        assert tls.certificates[0].private_key.kind == KeyKind.EC

    def test_first_parseable_key_wins(self, rsa_key, ec_key, ed25519_key, make_cert, pem):
        """Unsupported key is skipped, the next parseable key is used, later keys ignored"""
        keys = pem.pkcs8(ed25519_key) + pem.pkcs1(rsa_key) + pem.pkcs8(ec_key)
        profile = TLSProfile(certificates=[CertRecord(cert=pem.cert(make_cert(rsa_key)), key=keys)])

        tls = resolve_tls_profile(profile)

        assert tls.certificates[0].private_key.kind == KeyKind.RSA

    def test_blocks_may_be_interleaved(self, rsa_key, make_cert, pem):
        """Key in the cert text and cert in the key text should still be found"""
        cert = make_cert(rsa_key)
        profile = TLSProfile(certificates=[CertRecord(cert=pem.pkcs8(rsa_key), key=pem.cert(cert))])

        tls = resolve_tls_profile(profile)

        assert len(tls.certificates) == 1
        assert tls.certificates[0].private_key.kind == KeyKind.RSA

    def test_no_key_sharing_across_records(self, rsa_key, make_cert, pem):
        """Key from one record must not be used for another record's certificate"""
        profile = TLSProfile(certificates=[
            CertRecord(key=pem.pkcs1(rsa_key)),
            CertRecord(cert=pem.cert(make_cert(rsa_key))),
        ])

        tls = resolve_tls_profile(profile)

        assert len(tls.certificates) == 1
        assert tls.certificates[0].private_key is None

    def test_mixed_key_formats_across_records(self, rsa_key, ec_key, ed25519_key, make_cert, pem):
        """PKCS#1 RSA and PKCS#8 EC keys are accepted, PKCS#8 Ed25519 is rejected without raising"""
        profile = TLSProfile(certificates=[
            CertRecord(cert=pem.cert(make_cert(rsa_key, "rsa")), key=pem.pkcs1(rsa_key)),
            CertRecord(cert=pem.cert(make_cert(ec_key, "ec")), key=pem.pkcs8(ec_key)),
            CertRecord(cert=pem.cert(make_cert(ed25519_key, "ed")), key=pem.pkcs8(ed25519_key)),
        ])

        tls = resolve_tls_profile(profile)

        assert len(tls.certificates) == 3
        assert tls.certificates[0].private_key.kind == KeyKind.RSA
        assert tls.certificates[1].private_key.kind == KeyKind.EC
        assert tls.certificates[2].private_key is None

    def test_bad_certificate_skipped(self, rsa_key, make_cert, pem, caplog):
        """Undecodable certificate is logged and skipped, valid ones kept"""
        cert = make_cert(rsa_key)
        profile = TLSProfile(certificates=[
            CertRecord(cert=BAD_CERT_PEM + pem.cert(cert), key=pem.pkcs1(rsa_key)),
        ])

        with caplog.at_level(logging.WARNING, logger="imagetranslation.tls"):
            tls = resolve_tls_profile(profile, "broken")

        assert [c.certificate for c in tls.certificates] == [cert]
        assert "Error decoding certificate #0 from transport profile broken" in caplog.text

    def test_bad_key_logged(self, rsa_key, ed25519_key, make_cert, pem, caplog):
        """Unsupported key is logged with the record index"""
        profile = TLSProfile(certificates=[
            CertRecord(cert=pem.cert(make_cert(rsa_key))),
            CertRecord(cert=pem.cert(make_cert(rsa_key)), key=pem.pkcs8(ed25519_key)),
        ])

        with caplog.at_level(logging.WARNING, logger="imagetranslation.tls"):
            tls = resolve_tls_profile(profile, "edkeys")

        assert len(tls.certificates) == 2
        assert "Error decoding private key #1 from transport profile edkeys" in caplog.text
