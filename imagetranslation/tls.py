"""
TLS profile resolution.

Turns the PEM certificate bundle of a transport profile into parsed
certificate/key pairs. Bad blocks are logged and skipped; resolution itself
never fails.
"""

import logging
from typing import List, Optional

from cryptography import x509

from .keys import KeyDecodeError, parse_private_key
from .models import CertRecord, TLSProfile
from .pem import iter_pem_blocks
from .types import PrivateKey, TLSCertificate, TLSConfig

logger = logging.getLogger(__name__)


class CertDecodeError(Exception):
    """Raised when a CERTIFICATE block is not a valid X.509 certificate"""
    pass


def parse_certificate(der: bytes) -> x509.Certificate:
    """Parse DER bytes as an X.509 certificate, raising CertDecodeError on failure"""
    try:
        return x509.load_der_x509_certificate(der)
    except ValueError as e:
        raise CertDecodeError(f"invalid certificate: {e}")


def _resolve_record(record: CertRecord, index: int, profile_name: str) -> List[TLSCertificate]:
    certificates: List[x509.Certificate] = []
    private_key: Optional[PrivateKey] = None

    # Key text first, then cert text; either may hold blocks of any type
    for text in (record.key, record.cert):
        for block in iter_pem_blocks(text):
            if block.type == "CERTIFICATE":
                try:
                    certificates.append(parse_certificate(block.data))
                except CertDecodeError as e:
                    logger.warning(
                        f"Error decoding certificate #{index} from transport profile {profile_name}: {e}"
                    )
            elif private_key is None and block.type.endswith("PRIVATE KEY"):
                try:
                    private_key = parse_private_key(block.data)
                except KeyDecodeError as e:
                    logger.warning(
                        f"Error decoding private key #{index} from transport profile {profile_name}: {e}"
                    )

    return [TLSCertificate(certificate=c, private_key=private_key) for c in certificates]


def resolve_tls_profile(tls: TLSProfile, profile_name: str = "") -> TLSConfig:
    """
    Build resolved TLS material from a TLS profile.

    Each certificate record is handled on its own: all certificates found in a
    record are paired with the first private key that parsed in that record.

    Args:
        tls: TLS section of a transport profile
        profile_name: Transport profile name, used in log messages

    Returns:
        TLSConfig with server name, insecure flag and parsed certificates
    """
    certificates: List[TLSCertificate] = []
    for index, record in enumerate(tls.certificates):
        certificates.extend(_resolve_record(record, index, profile_name))

    return TLSConfig(
        server_name=tls.server_name,
        insecure=tls.insecure,
        certificates=certificates,
    )
