"""
ConfigSource abstraction for image translation configs.

Provides a unified interface over the places translation configs come from:
- CRDConfigSource: VirtletImageMapping objects in the cluster
- FileConfigSource: YAML/JSON files in a local directory

The store only enumerates handles and reads payloads; how a source gets
them is its own business.
"""

from abc import ABC, abstractmethod
from typing import List

from ..context import ReloadContext
from ..models import TranslationConfig


class SourceUnavailableError(Exception):
    """Raised when a source cannot list its configs or a config cannot be read"""
    pass


class ConfigHandle(ABC):
    """Reference to one named config inside a source"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Config name, unique within the source"""
        pass

    @abstractmethod
    def payload(self) -> TranslationConfig:
        """
        Read and parse the config.

        Raises:
            SourceUnavailableError: If the config cannot be read or parsed
        """
        pass


class ConfigSource(ABC):
    """Provider of translation configs"""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable description used in log messages"""
        pass

    @abstractmethod
    def configs(self, ctx: ReloadContext) -> List[ConfigHandle]:
        """
        List the configs currently available.

        Args:
            ctx: Reload context; implementations should give up once cancelled

        Raises:
            SourceUnavailableError: If the source cannot be enumerated
        """
        pass
