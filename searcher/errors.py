"""
errors.py

Exception types raised by the search pipeline, plus the reasons a single
file can be abandoned without failing the whole run.
"""

from enum import Enum


class SearchError(Exception):
    """Base class for searcher errors."""


class InvalidPatternError(SearchError):
    """The pattern could not be compiled. Fatal to the run."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid regular expression '{pattern}' - {reason}")
        self.pattern = pattern
        self.reason = reason


class MatchingEngineError(SearchError):
    """The regex engine failed on a particular line."""


class ConfigError(SearchError):
    """The configuration file is missing or malformed."""


class AbortReason(str, Enum):
    BINARY = "binary"
    ENCODING = "encoding"
    ENGINE = "engine"
    PERMISSION = "permission"
    IO = "io"
