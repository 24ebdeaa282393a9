"""
Store for the active set of translation configs.

The set is replaced wholesale on every reload. A new mapping is built off to
the side and published with a single reference assignment, so readers see
either the old set or the new one, never a mix. Reloads are serialized with
a lock that readers never take.
"""

import logging
import threading
from types import MappingProxyType
from typing import Dict, Mapping

from .context import ReloadContext
from .models import TranslationConfig
from .sources.base import ConfigSource, SourceUnavailableError

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, TranslationConfig] = MappingProxyType({})


class TranslationStore:
    """Holds the currently installed configs, keyed by config name"""

    def __init__(self):
        self._configs: Mapping[str, TranslationConfig] = _EMPTY
        self._reload_lock = threading.Lock()
        self.loaded = False

    def snapshot(self) -> Mapping[str, TranslationConfig]:
        """Current read-only config mapping"""
        return self._configs

    def _read_source(self, ctx: ReloadContext, source: ConfigSource, configs: Dict[str, TranslationConfig]):
        try:
            handles = source.configs(ctx)
        except SourceUnavailableError as e:
            logger.warning(f"Cannot get image translation configs from {source.description}: {e}")
            return
        except Exception as e:
            logger.error(f"Unexpected error listing image translation configs from {source.description}: {e}", exc_info=True)
            return

        for handle in handles:
            if ctx.cancelled:
                logger.warning(f"Reload cancelled, skipping remaining configs from {source.description}")
                return
            try:
                body = handle.payload()
            except SourceUnavailableError as e:
                logger.warning(f"Cannot load image translation config {handle.name} from {source.description}: {e}")
                continue
            except Exception as e:
                logger.error(f"Unexpected error loading image translation config {handle.name} from {source.description}: {e}", exc_info=True)
                continue

            configs[handle.name] = body.model_copy(update={"name": handle.name})

    def load(self, ctx: ReloadContext, *sources: ConfigSource):
        """
        Replace the installed configs with those read from `sources`.

        Failures of individual sources or configs are logged and skipped.
        Configs not present in this read are dropped. Never raises.

        Args:
            ctx: Reload context; once cancelled, remaining reads are skipped
            *sources: Config sources, read in order (later names win)
        """
        with self._reload_lock:
            configs: Dict[str, TranslationConfig] = {}
            for source in sources:
                if ctx.cancelled:
                    logger.warning(f"Reload cancelled, skipping {source.description}")
                    continue
                self._read_source(ctx, source, configs)

            # Single reference swap
            self._configs = MappingProxyType(configs)
            self.loaded = True

        logger.info(f"Loaded {len(configs)} image translation config(s)")
