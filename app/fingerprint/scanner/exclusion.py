"""Exclusion rules for scanned paths.

Paths handed to the matcher are relative to the root being scanned,
"/"-separated and prefixed with "./" (the root itself is "./"), so the
same rules apply to every root.

Pattern strings are regular expressions searched anywhere in the path
unless prefixed:

- ``glob:<pattern>`` matches the whole path or its final segment
  (fnmatch, case-sensitive).
- ``suffix:<text>`` matches paths ending with the literal text.
- ``re:<pattern>`` is an explicit regular expression.
"""

import fnmatch
import re
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from fingerprint.core.errors import ExclusionPatternError

# Default exclusion patterns (regular expressions).
# Dotfiles and dot-directories, then editor backup files.
DEFAULT_EXCLUDES: tuple[str, ...] = (
    r"/\.[^/]+$",
    r"~$",
)

_GLOB_PREFIX = "glob:"
_SUFFIX_PREFIX = "suffix:"
_REGEX_PREFIX = "re:"


@runtime_checkable
class PathPredicate(Protocol):
    """Anything that can decide whether a relative path matches."""

    def matches(self, path: str) -> bool: ...


class RegexPredicate:
    """Matches when the regular expression is found anywhere in the path."""

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        if isinstance(pattern, re.Pattern):
            self._regex = pattern
            return
        try:
            self._regex = re.compile(pattern)
        except re.error as e:
            msg = f"Invalid exclusion pattern {pattern!r}: {e}"
            raise ExclusionPatternError(msg) from e

    @property
    def pattern(self) -> str:
        return self._regex.pattern

    def matches(self, path: str) -> bool:
        return self._regex.search(path) is not None

    def __repr__(self) -> str:
        return f"RegexPredicate({self._regex.pattern!r})"


class GlobPredicate:
    """Matches the whole path, or its final segment, against a glob."""

    def __init__(self, pattern: str) -> None:
        if not pattern:
            msg = "Glob exclusion pattern cannot be empty"
            raise ExclusionPatternError(msg)
        self.pattern = pattern

    def matches(self, path: str) -> bool:
        name = path.rstrip("/").rsplit("/", 1)[-1]
        return fnmatch.fnmatchcase(path, self.pattern) or fnmatch.fnmatchcase(
            name, self.pattern
        )

    def __repr__(self) -> str:
        return f"GlobPredicate({self.pattern!r})"


class SuffixPredicate:
    """Matches paths ending with a literal suffix."""

    def __init__(self, suffix: str) -> None:
        if not suffix:
            msg = "Suffix exclusion pattern cannot be empty"
            raise ExclusionPatternError(msg)
        self.pattern = suffix

    def matches(self, path: str) -> bool:
        return path.endswith(self.pattern)

    def __repr__(self) -> str:
        return f"SuffixPredicate({self.pattern!r})"


ExclusionRule = str | re.Pattern[str] | PathPredicate


def parse_rule(rule: ExclusionRule) -> PathPredicate:
    """Turn a pattern string, compiled regex or predicate into a predicate.

    Args:
        rule: Pattern string (optionally prefixed), compiled regex, or an
            object already implementing ``matches(path)``.

    Returns:
        A PathPredicate for the rule.

    Raises:
        ExclusionPatternError: If the pattern is malformed.
    """
    if isinstance(rule, re.Pattern):
        return RegexPredicate(rule)
    if isinstance(rule, str):
        if rule.startswith(_GLOB_PREFIX):
            return GlobPredicate(rule[len(_GLOB_PREFIX) :])
        if rule.startswith(_SUFFIX_PREFIX):
            return SuffixPredicate(rule[len(_SUFFIX_PREFIX) :])
        if rule.startswith(_REGEX_PREFIX):
            return RegexPredicate(rule[len(_REGEX_PREFIX) :])
        return RegexPredicate(rule)
    if isinstance(rule, PathPredicate):
        return rule

    msg = f"Unsupported exclusion rule: {rule!r}"
    raise ExclusionPatternError(msg)


class ExclusionMatcher:
    """Ordered set of exclusion rules evaluated with short-circuit OR.

    Args:
        rules: Exclusion rules. None selects DEFAULT_EXCLUDES; an empty
            sequence excludes nothing.

    Raises:
        ExclusionPatternError: If any rule is malformed.
    """

    def __init__(self, rules: Iterable[ExclusionRule] | None = None) -> None:
        source = DEFAULT_EXCLUDES if rules is None else rules
        self._predicates: tuple[PathPredicate, ...] = tuple(parse_rule(r) for r in source)

    @property
    def predicates(self) -> Sequence[PathPredicate]:
        return self._predicates

    def excluded(self, path: str) -> bool:
        """Return True if any rule matches the relative path."""
        return any(predicate.matches(path) for predicate in self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)
