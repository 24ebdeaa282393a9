"""
Config sources for image translation.
"""

from .base import ConfigHandle, ConfigSource, SourceUnavailableError
from .crd_source import CRDConfigSource, build_api_client
from .file_source import FileConfigSource

__all__ = [
    'ConfigHandle',
    'ConfigSource',
    'SourceUnavailableError',
    'CRDConfigSource',
    'FileConfigSource',
    'build_api_client',
]
