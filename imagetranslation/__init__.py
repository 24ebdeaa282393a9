"""
Image name translation.

Maps container image names to download endpoints (URL, timeout, proxy,
redirect limit, TLS material) using operator supplied translation configs.
"""

from .context import ReloadContext
from .models import CertRecord, TLSProfile, TransportProfile, TranslationConfig, TranslationRule
from .translator import (
    ImageTranslator,
    Translator,
    build_default_translator,
    build_empty_translator,
    new_translator,
)
from .types import Endpoint, KeyKind, PrivateKey, TLSCertificate, TLSConfig

__all__ = [
    'ReloadContext',
    'CertRecord',
    'TLSProfile',
    'TransportProfile',
    'TranslationConfig',
    'TranslationRule',
    'ImageTranslator',
    'Translator',
    'build_default_translator',
    'build_empty_translator',
    'new_translator',
    'Endpoint',
    'KeyKind',
    'PrivateKey',
    'TLSCertificate',
    'TLSConfig',
]
