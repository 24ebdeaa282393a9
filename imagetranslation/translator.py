"""
Image name translator.

Resolves image names to download endpoints using the installed translation
configs. Names that no rule covers are used as-is (identity endpoint).
"""

import logging
from typing import Callable, List, Optional

from kubernetes import client

from .context import ReloadContext
from .endpoint import build_endpoint
from .matcher import RuleMatcher
from .sources import CRDConfigSource, ConfigSource, FileConfigSource
from .store import TranslationStore
from .types import Endpoint

logger = logging.getLogger(__name__)

DEFAULT_CRD_NAMESPACE = "kube-system"

# (ctx, image name) -> Endpoint
ImageTranslator = Callable[[ReloadContext, str], Endpoint]


class Translator:
    """
    Translates image names into endpoints.

    Args:
        allow_regex: Enable `regexp` rules in addition to exact-name rules
        store: Config store to read from (a new empty store by default)
    """

    def __init__(self, allow_regex: bool = False, store: Optional[TranslationStore] = None):
        self.matcher = RuleMatcher(allow_regex=allow_regex)
        self.store = store if store is not None else TranslationStore()

    def load_configs(self, ctx: ReloadContext, *sources: ConfigSource):
        """Reload configs from `sources`, replacing the current set"""
        self.store.load(ctx, *sources)

    def translate(self, name: str) -> Endpoint:
        """
        Resolve `name` to an endpoint.

        Returns the endpoint derived from the first matching rule, or the
        identity endpoint (name as URL, unlimited redirects) when nothing
        matches. Never raises.
        """
        match = self.matcher.match(name, self.store.snapshot())
        if match is not None:
            return build_endpoint(match.rule, match.config)

        logger.info(f"Using URL '{name}' without translation")
        return Endpoint.identity(name)


def new_translator(allow_regex: bool) -> Translator:
    """Create a translator with an empty config store"""
    return Translator(allow_regex=allow_regex)


def build_default_translator(
    config_dir: str,
    allow_regex: bool,
    api_client: Optional[client.ApiClient] = None,
    namespace: str = DEFAULT_CRD_NAMESPACE,
) -> ImageTranslator:
    """
    Build a translator function backed by CRDs and/or a config directory.

    Every call creates a fresh translator and reloads all configs, so changes
    to the sources take effect on the next call.

    Args:
        config_dir: Directory with config files ("" to disable)
        allow_regex: Enable `regexp` rules
        api_client: Kubernetes client for VirtletImageMapping objects (None to disable)
        namespace: Namespace holding the VirtletImageMapping objects

    Returns:
        Callable taking (ctx, name) and returning an Endpoint
    """
    sources: List[ConfigSource] = []
    if api_client is not None:
        sources.append(CRDConfigSource(namespace, api_client))
    if config_dir:
        sources.append(FileConfigSource(config_dir))

    def translate(ctx: ReloadContext, name: str) -> Endpoint:
        translator = new_translator(allow_regex)
        translator.load_configs(ctx, *sources)
        return translator.translate(name)

    return translate


def build_empty_translator() -> ImageTranslator:
    """Build a translator function that never applies any translation"""
    def translate(ctx: ReloadContext, name: str) -> Endpoint:
        return new_translator(False).translate(name)

    return translate
