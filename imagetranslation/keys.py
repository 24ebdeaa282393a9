"""
Private key parsing for transport profile TLS material.

A PEM label such as "PRIVATE KEY" does not reliably say which encoding the
DER inside uses, so parse_private_key() tries the known encodings in a fixed
order: PKCS#1 RSA, PKCS#8 (RSA or EC only), SEC1 EC.
"""

import base64
import logging
import textwrap
from typing import Callable, List, Tuple

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from .types import KeyKind, PrivateKey

logger = logging.getLogger(__name__)


class KeyDecodeError(Exception):
    """Raised when DER data cannot be parsed as a supported private key"""
    pass


class KeyTypeUnsupportedError(KeyDecodeError):
    """Raised when a PKCS#8 key wraps neither an RSA nor an EC key"""
    pass


def _load_der_as(label: str, der: bytes):
    """
    Load DER as the single encoding implied by `label`.

    The DER is re-armored with the given label so the loader parses exactly
    that format instead of auto-detecting one.
    """
    body = "\n".join(textwrap.wrap(base64.b64encode(der).decode('ascii'), 64))
    pem_text = f"-----BEGIN {label}-----\n{body}\n-----END {label}-----\n"
    return serialization.load_pem_private_key(pem_text.encode('ascii'), password=None)


def _tag(key) -> PrivateKey:
    if isinstance(key, rsa.RSAPrivateKey):
        return PrivateKey(kind=KeyKind.RSA, key=key)
    if isinstance(key, ec.EllipticCurvePrivateKey):
        return PrivateKey(kind=KeyKind.EC, key=key)
    raise KeyTypeUnsupportedError("tls: found unknown private key type in PKCS#8 wrapping")


def parse_pkcs1_private_key(der: bytes) -> PrivateKey:
    """Parse a PKCS#1 RSAPrivateKey structure"""
    return PrivateKey(kind=KeyKind.RSA, key=_load_der_as("RSA PRIVATE KEY", der))


def parse_pkcs8_private_key(der: bytes) -> PrivateKey:
    """
    Parse a PKCS#8 PrivateKeyInfo structure.

    Raises:
        KeyTypeUnsupportedError: If the wrapped key is neither RSA nor EC
    """
    return _tag(_load_der_as("PRIVATE KEY", der))


def parse_sec1_private_key(der: bytes) -> PrivateKey:
    """Parse a SEC1 ECPrivateKey structure"""
    return PrivateKey(kind=KeyKind.EC, key=_load_der_as("EC PRIVATE KEY", der))


_PARSERS: List[Tuple[str, Callable[[bytes], PrivateKey]]] = [
    ("PKCS#1", parse_pkcs1_private_key),
    ("PKCS#8", parse_pkcs8_private_key),
    ("SEC1", parse_sec1_private_key),
]


def parse_private_key(der: bytes) -> PrivateKey:
    """
    Parse a DER private key of unknown encoding.

    Tries PKCS#1, PKCS#8 and SEC1 in that order and returns the first
    success. A PKCS#8 key of an unsupported algorithm stops the search.

    Args:
        der: Raw DER bytes from a "... PRIVATE KEY" PEM block

    Returns:
        PrivateKey tagged with KeyKind.RSA or KeyKind.EC

    Raises:
        KeyTypeUnsupportedError: PKCS#8 wrapping of an unsupported key type
        KeyDecodeError: None of the encodings could be parsed
    """
    for fmt, parser in _PARSERS:
        try:
            return parser(der)
        except KeyTypeUnsupportedError:
            raise
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            logger.debug(f"Private key is not {fmt}: {e}")

    raise KeyDecodeError("tls: failed to parse private key")
