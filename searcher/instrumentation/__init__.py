from searcher.instrumentation.console import error, warn
from searcher.instrumentation.logging import RunLogger, get_logger, init_logger

__all__ = ["RunLogger", "get_logger", "init_logger", "error", "warn"]
