"""
Exclusion pattern matching.

Manifest and environment values are normalised into an `ExclusionPattern`:

- LiteralPattern: a glob string, with a regular-expression fallback when the
  glob does not match and the text compiles as a regex
- RegexPattern: a compiled regular expression, searched in the input
- PatternList: any element matching is a match, empty never matches
"""

import fnmatch
import logging
import re
from dataclasses import dataclass
from typing import Any, Tuple, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiteralPattern:
    text: str


@dataclass(frozen=True)
class RegexPattern:
    regex: re.Pattern


@dataclass(frozen=True)
class PatternList:
    items: Tuple["ExclusionPattern", ...] = ()


ExclusionPattern = Union[LiteralPattern, RegexPattern, PatternList]


def to_pattern(raw: Any) -> ExclusionPattern:
    """
    Build an ExclusionPattern from a manifest or environment value.

    Raises:
        ConfigurationError: if the value has no pattern interpretation
    """
    if isinstance(raw, (LiteralPattern, RegexPattern, PatternList)):
        return raw
    if isinstance(raw, str):
        return LiteralPattern(raw)
    if isinstance(raw, re.Pattern):
        return RegexPattern(raw)
    if isinstance(raw, (list, tuple)):
        return PatternList(tuple(to_pattern(item) for item in raw))
    raise ConfigurationError(f"Prebuild matcher {raw!r} is not a supported exclusion pattern")


def _compile(text: str) -> re.Pattern | None:
    try:
        return re.compile(text)
    except re.error:
        return None


def _match(pattern: ExclusionPattern, value: str) -> bool:
    if isinstance(pattern, PatternList):
        return any(_match(item, value) for item in pattern.items)
    if isinstance(pattern, LiteralPattern):
        if fnmatch.fnmatchcase(value, pattern.text):
            return True
        regex = _compile(pattern.text)
        return regex is not None and regex.fullmatch(value) is not None
    if isinstance(pattern, RegexPattern):
        return pattern.regex.search(value) is not None
    raise ConfigurationError(f"Prebuild matcher {pattern!r} is invalid for input '{value}'")


def matches(patterns: Any, value: str) -> bool:
    """
    Check if `value` matches a single pattern or any pattern of a list.

    Raises:
        ConfigurationError: for unsupported pattern shapes, naming pattern and input
    """
    try:
        pattern = to_pattern(patterns)
    except ConfigurationError as e:
        raise ConfigurationError(f"{e} (input '{value}')") from e
    result = _match(pattern, value)
    logger.debug(f"Pattern {patterns!r} {'matches' if result else 'does not match'} '{value}'")
    return result
