# searcher package exports
from .config import SearchConfig
from .matcher import PatternMatcher
from .scanner import FileScanner, ScanResult
from .state import RunState

__version__ = "1.0"

__all__ = [
    'SearchConfig',
    'PatternMatcher',
    'FileScanner',
    'ScanResult',
    'RunState',
]
