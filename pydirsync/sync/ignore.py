"""Exclusion patterns for skipping paths during a sync.

Pattern syntax is deliberately small: ``*`` matches any run of characters
and every other character (path separators included) is literal. Patterns
are matched case-insensitively anywhere in the full path string, so
``*temp*`` excludes ``/data/tempfile.txt`` and ``cache`` excludes every path
containing a ``cache`` segment or substring.
"""

import logging
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class ExclusionPattern:
    """A compiled exclusion pattern."""

    raw: str
    """Pattern as supplied by the caller"""

    regex: "re.Pattern[str]"
    """Compiled case-insensitive regular expression"""

    def matches(self, path: Union[str, "os.PathLike[str]"]) -> bool:
        """Check whether this pattern matches the given full path."""
        return self.regex.search(os.fspath(path)) is not None

    def __str__(self) -> str:
        return self.raw


def pattern_to_regex(pattern: str) -> "re.Pattern[str]":
    """Convert a wildcard pattern to a compiled regular expression.

    Args:
        pattern: Raw pattern where ``*`` matches any substring

    Returns:
        Compiled case-insensitive regex

    Examples:
        >>> bool(pattern_to_regex("*.tmp").search("/data/a.TMP"))
        True
        >>> bool(pattern_to_regex("a.b").search("/data/axb"))
        False
    """
    literal_parts = (re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(".*".join(literal_parts), re.IGNORECASE)


def compile_patterns(raw_patterns: Optional[Iterable[str]]) -> list[ExclusionPattern]:
    """Compile raw exclusion strings once for a sync run.

    Empty strings are dropped because they would match every path.

    Args:
        raw_patterns: Patterns supplied by the caller (may be None)

    Returns:
        List of compiled ExclusionPattern objects, in input order
    """
    compiled: list[ExclusionPattern] = []
    for raw in raw_patterns or []:
        if not raw:
            logger.debug("Dropping empty exclusion pattern")
            continue
        compiled.append(ExclusionPattern(raw=raw, regex=pattern_to_regex(raw)))

    logger.debug(f"Compiled {len(compiled)} exclusion pattern(s)")
    return compiled


def find_match(
    path: Union[str, "os.PathLike[str]"], patterns: Iterable[ExclusionPattern]
) -> Optional[ExclusionPattern]:
    """Return the first pattern matching the path, or None."""
    for pattern in patterns:
        if pattern.matches(path):
            return pattern
    return None


def matches(
    path: Union[str, "os.PathLike[str]"], patterns: Iterable[ExclusionPattern]
) -> bool:
    """Check whether any pattern matches the path (first hit wins)."""
    return find_match(path, patterns) is not None
