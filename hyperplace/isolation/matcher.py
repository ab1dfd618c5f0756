"""
Compiled regular-expression matching for namespaces and broker hosts.
"""

import re
from typing import Iterable, Sequence, TypeVar
from urllib.parse import urlsplit

from .errors import PatternCompileError


BrokerT = TypeVar("BrokerT", bound=str)


def broker_host(broker: str) -> str:
    """
    Return the host part matched against broker patterns.

    Candidates given as URLs (``http://host:port``) match on their host,
    with userinfo and port removed and case preserved; anything else is
    matched as-is.
    """
    if "://" not in broker:
        return broker

    netloc = urlsplit(broker).netloc
    _, _, host = netloc.rpartition("@")

    if host.startswith("["):
        host, _, _ = host[1:].partition("]")

    else:
        host, _, _ = host.partition(":")

    return host or broker


class PatternMatcher:
    """
    An ordered list of regular expressions compiled once and matched with
    full-string semantics. A value matches if any pattern matches it.
    """

    __slots__ = ("_patterns", "_compiled")

    def __init__(
        self,
        patterns: Iterable[str],
        field: str = "pattern",
    ) -> None:
        if isinstance(patterns, str):
            raise TypeError(
                f"{field} patterns must be a sequence of strings, not a single string"
            )

        self._patterns: tuple[str, ...] = tuple(patterns)
        self._compiled: tuple[re.Pattern[str], ...] = tuple(
            self._compile(pattern, field) for pattern in self._patterns
        )

    @staticmethod
    def _compile(pattern: str, field: str) -> re.Pattern[str]:
        try:
            return re.compile(pattern)

        except re.error as err:
            raise PatternCompileError(pattern, field, str(err)) from err

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def matches(self, value: str) -> bool:
        for compiled in self._compiled:
            if compiled.fullmatch(value) is not None:
                return True

        return False

    def filter(self, candidates: Sequence[BrokerT]) -> list[BrokerT]:
        """Return the candidates whose host matches, in input order."""
        return [
            candidate
            for candidate in candidates
            if self.matches(broker_host(candidate))
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternMatcher):
            return NotImplemented

        return self._patterns == other._patterns

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"PatternMatcher({list(self._patterns)!r})"


def filter_by_pattern(
    patterns: PatternMatcher | Iterable[str],
    candidates: Sequence[BrokerT],
) -> list[BrokerT]:
    """
    Return the subsequence of ``candidates`` whose host fully matches any
    of ``patterns``, preserving input order.
    """
    if not isinstance(patterns, PatternMatcher):
        patterns = PatternMatcher(patterns)

    return patterns.filter(candidates)
