"""
Configuration Management for image translation
Centralizes environment-based configuration and logging setup
"""

import os
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None):
    """
    Configure application logging.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        log_file: Optional path of a rotating log file
    """
    root_logger = logging.getLogger()

    # Close and clear existing handlers so our configuration is the only one
    for handler in root_logger.handlers[:]:  # Copy list to avoid modification during iteration
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, mode=0o700, exist_ok=True)
        # Max 10MB per file, keep 14 backups
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=14,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # The kubernetes client logs every request at DEBUG
    if level != 'DEBUG':
        logging.getLogger("kubernetes").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)


class TranslatorConfig:
    """Translator configuration read from the environment"""

    def __init__(self):
        # Config sources
        self.config_dir = os.getenv('IMAGE_TRANSLATIONS_DIR', '')
        self.use_crd = _env_bool('IMAGE_TRANSLATION_USE_CRD')
        self.kubeconfig = os.getenv('IMAGE_TRANSLATION_KUBECONFIG') or None
        self.namespace = os.getenv('IMAGE_TRANSLATION_NAMESPACE', 'kube-system')

        # Matching
        self.allow_regex = _env_bool('IMAGE_TRANSLATION_ALLOW_REGEXP')

        # Reload deadline in seconds
        self.reload_timeout = float(os.getenv('IMAGE_TRANSLATION_RELOAD_TIMEOUT', 30))

        # Logging
        self.log_level = os.getenv('IMAGE_TRANSLATION_LOG_LEVEL', 'INFO').upper()
        self.log_file = os.getenv('IMAGE_TRANSLATION_LOG_FILE') or None

    def validate(self):
        """Validate configuration"""
        if self.reload_timeout < 0:
            raise ValueError(f"Reload timeout cannot be negative: {self.reload_timeout}")

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

        return True
