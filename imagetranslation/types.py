"""
Shared types for image translation.

This module contains the dataclasses returned to callers of the translator:
the resolved Endpoint and the TLS material attached to it.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import ec, rsa


class KeyKind(Enum):
    """Private key algorithms accepted in transport profiles."""
    RSA = "rsa"
    EC = "ec"


@dataclass(frozen=True)
class PrivateKey:
    """
    Parsed private key tagged with its algorithm.

    Callers branch on `kind`.
    """
    kind: KeyKind
    key: Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]


@dataclass(frozen=True)
class TLSCertificate:
    """Client certificate paired with the key found in the same record."""
    certificate: x509.Certificate
    private_key: Optional[PrivateKey] = None


@dataclass
class TLSConfig:
    """Resolved TLS material for an endpoint."""
    server_name: str = ""
    insecure: bool = False
    certificates: List[TLSCertificate] = field(default_factory=list)


@dataclass
class Endpoint:
    """
    Where and how to fetch an image.

    Owned by the caller after it is returned. max_redirects is -1 for
    unlimited redirects, never None.
    """
    url: str
    timeout: timedelta = timedelta(0)
    proxy: str = ""
    profile_name: str = ""
    max_redirects: int = -1
    tls: Optional[TLSConfig] = None

    @classmethod
    def identity(cls, name: str) -> 'Endpoint':
        """Endpoint that uses the image name verbatim as the URL."""
        return cls(url=name, max_redirects=-1)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (certificates rendered by subject)."""
        result: Dict[str, Any] = {
            "url": self.url,
            "timeout_ms": int(self.timeout.total_seconds() * 1000),
            "proxy": self.proxy,
            "profile_name": self.profile_name,
            "max_redirects": self.max_redirects,
            "tls": None,
        }
        if self.tls is not None:
            result["tls"] = {
                "server_name": self.tls.server_name,
                "insecure": self.tls.insecure,
                "certificates": [
                    {
                        "subject": c.certificate.subject.rfc4514_string(),
                        "key": c.private_key.kind.value if c.private_key else None,
                    }
                    for c in self.tls.certificates
                ],
            }
        return result
