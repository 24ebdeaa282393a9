"""
Endpoint construction from a matched rule and its owning config.
"""

import logging
from datetime import timedelta

from .models import TranslationConfig, TranslationRule
from .tls import resolve_tls_profile
from .types import Endpoint

logger = logging.getLogger(__name__)


def build_endpoint(rule: TranslationRule, config: TranslationConfig) -> Endpoint:
    """
    Combine a rule with the transport profile it names.

    A rule whose transport is not defined in the config gets a bare endpoint
    with unlimited redirects.
    """
    profile = config.transports.get(rule.transport)
    if profile is None:
        if rule.transport:
            logger.debug(f"Transport profile '{rule.transport}' not found in config '{config.name}'")
        return Endpoint(url=rule.url, max_redirects=-1)

    tls = None
    if profile.tls is not None:
        tls = resolve_tls_profile(profile.tls, rule.transport)

    try:
        timeout = timedelta(milliseconds=max(0, profile.timeout_milliseconds))
    except OverflowError:
        timeout = timedelta.max

    return Endpoint(
        url=rule.url,
        timeout=timeout,
        proxy=profile.proxy,
        profile_name=rule.transport,
        max_redirects=profile.max_redirects if profile.max_redirects is not None else -1,
        tls=tls,
    )
