from .settings import TranslatorConfig, setup_logging

__all__ = ['TranslatorConfig', 'setup_logging']
