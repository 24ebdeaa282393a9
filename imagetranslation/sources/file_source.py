"""
Directory-backed config source.

Every regular, non-hidden file in the directory is one translation config,
named after the file. Files are YAML (JSON works too, being valid YAML).
"""

import logging
import os
from typing import List

import yaml
from pydantic import ValidationError

from ..context import ReloadContext
from ..models import TranslationConfig
from .base import ConfigHandle, ConfigSource, SourceUnavailableError

logger = logging.getLogger(__name__)


class FileConfigHandle(ConfigHandle):
    """Single config file"""

    def __init__(self, path: str):
        self.path = path

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def payload(self) -> TranslationConfig:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise SourceUnavailableError(f"Cannot read {self.path}: {e}")
        except yaml.YAMLError as e:
            raise SourceUnavailableError(f"Invalid YAML in {self.path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SourceUnavailableError(f"{self.path} must contain a YAML object")

        try:
            return TranslationConfig.model_validate(data)
        except ValidationError as e:
            raise SourceUnavailableError(f"Invalid translation config in {self.path}: {e}")


class FileConfigSource(ConfigSource):
    """
    Reads translation configs from a directory.

    Args:
        directory: Directory holding one config per file (not recursive)
    """

    def __init__(self, directory: str):
        self.directory = directory

    @property
    def description(self) -> str:
        return f"directory {self.directory}"

    def configs(self, ctx: ReloadContext) -> List[ConfigHandle]:
        try:
            entries = sorted(os.listdir(self.directory))
        except OSError as e:
            raise SourceUnavailableError(f"Cannot list {self.directory}: {e}")

        handles: List[ConfigHandle] = []
        for entry in entries:
            if entry.startswith('.'):
                continue
            path = os.path.join(self.directory, entry)
            if not os.path.isfile(path):
                continue
            handles.append(FileConfigHandle(path))

        logger.debug(f"Found {len(handles)} image translation config files in {self.directory}")
        return handles
