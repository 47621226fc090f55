"""
matcher.py

Thin adapter over the `re` engine. Case sensitivity is fixed at compile time;
every run-time failure of the engine surfaces as MatchingEngineError so the
scanner can drop the file instead of crashing.
"""

import re
from typing import List, Optional, Pattern, Tuple

from searcher.errors import InvalidPatternError, MatchingEngineError

# (start, end) offsets into the line, end exclusive
Span = Tuple[int, int]

_ENGINE_ERRORS = (re.error, RecursionError, ValueError)


class PatternMatcher:
    """Compiled pattern that reports whether and where a line matches."""

    def __init__(self, pattern: str, compiled: Pattern[str]):
        self.pattern = pattern
        self._regex = compiled

    @classmethod
    def compile(cls, pattern: str, ignore_case: bool = False) -> "PatternMatcher":
        flags = re.IGNORECASE if ignore_case else 0
        try:
            compiled = re.compile(pattern, flags)
        except (re.error, RecursionError, OverflowError) as e:
            raise InvalidPatternError(pattern, str(e)) from e
        return cls(pattern, compiled)

    @property
    def ignore_case(self) -> bool:
        return bool(self._regex.flags & re.IGNORECASE)

    def find(self, line: str) -> Optional[Span]:
        """Return the span of the first match in `line`, or None."""
        try:
            m = self._regex.search(line)
        except _ENGINE_ERRORS as e:
            raise MatchingEngineError(str(e)) from e
        return m.span() if m else None

    def matches(self, line: str) -> bool:
        return self.find(line) is not None

    def spans(self, line: str) -> List[Span]:
        """
        All non-overlapping, non-empty match spans, left to right.
        Empty matches (e.g. from `a*`) carry nothing to highlight and are dropped.
        """
        try:
            return [m.span() for m in self._regex.finditer(line) if m.end() > m.start()]
        except _ENGINE_ERRORS as e:
            raise MatchingEngineError(str(e)) from e
