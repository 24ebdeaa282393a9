"""
Rule matching for image names.

For each config whose prefix fits the name, exact-name rules are tried in
declared order, then (if enabled) regex rules in declared order. The first
config that yields a rule wins.
"""

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from .models import TranslationConfig, TranslationRule

logger = logging.getLogger(__name__)

# $$, ${name}, $name -- name is the longest run of [A-Za-z0-9_] (ASCII only)
_TEMPLATE_REF_RE = re.compile(r'\$(?:(\$)|\{([A-Za-z0-9_]+)\}|([A-Za-z0-9_]+))')


@dataclass(frozen=True)
class RuleMatch:
    """Rule selected for a name, together with the config that owns it"""
    rule: TranslationRule
    config: TranslationConfig


def _group_value(match: re.Match, ref: str) -> str:
    if ref.isdigit() and (ref == "0" or not ref.startswith("0")):
        index = int(ref)
        if index > match.re.groups:
            return ""
    else:
        index = match.re.groupindex.get(ref)
        if index is None:
            return ""
    return match.group(index) or ""


def expand_template(match: re.Match, template: str) -> str:
    """
    Expand `$` references in a URL template with groups from `match`.

    Supports $1, ${1}, $name, ${name} and $$ for a literal dollar sign.
    References to unknown or non-participating groups expand to an empty
    string; a `$` that does not start a reference is kept as is.

    Example:
        >>> expand_template(re.search(r'^foo/(.*)$', 'foo/bar'), 'https://mirror/$1')
        'https://mirror/bar'
    """
    def replace(ref: re.Match) -> str:
        if ref.group(1):
            return "$"
        return _group_value(match, ref.group(2) or ref.group(3))

    return _TEMPLATE_REF_RE.sub(replace, template)


class RuleMatcher:
    """
    Finds the rule that applies to an image name.

    Args:
        allow_regex: Whether `regexp` rules are considered at all
    """

    def __init__(self, allow_regex: bool = False):
        self.allow_regex = allow_regex

    @staticmethod
    def _unprefixed_name(name: str, config: TranslationConfig) -> Optional[str]:
        prefix = config.prefix + "/"
        if prefix == "/":
            return name
        if not name.startswith(prefix):
            return None
        return name[len(prefix):]

    @staticmethod
    def _match_exact(name: str, config: TranslationConfig) -> Optional[TranslationRule]:
        for rule in config.rules:
            if rule.name and rule.name == name:
                return rule
        return None

    @staticmethod
    def _match_regex(name: str, config: TranslationConfig) -> Optional[TranslationRule]:
        for rule in config.rules:
            if not rule.regex:
                continue
            try:
                pattern = re.compile(rule.regex)
            except (re.error, OverflowError, RecursionError) as e:
                logger.warning(f"Invalid regexp '{rule.regex}' in image translation config '{config.name}': {e}")
                continue

            match = pattern.search(name)
            if match:
                # Installed rules are immutable; return an expanded copy
                return rule.model_copy(update={"url": expand_template(match, rule.url)})
        return None

    def match(self, name: str, configs: Mapping[str, TranslationConfig]) -> Optional[RuleMatch]:
        """
        Select the rule for `name`.

        Configs are visited in sorted name order. Within a config, exact-name
        rules are always tried before regex rules.

        Returns:
            RuleMatch, or None if no config has an applicable rule
        """
        for config_name in sorted(configs):
            config = configs[config_name]
            unprefixed = self._unprefixed_name(name, config)
            if unprefixed is None:
                continue

            rule = self._match_exact(unprefixed, config)
            if rule is None and self.allow_regex:
                rule = self._match_regex(unprefixed, config)

            if rule is not None:
                logger.debug(f"Image {name} matched config '{config_name}' -> {rule.url}")
                return RuleMatch(rule=rule, config=config)

        return None
