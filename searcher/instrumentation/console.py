"""
User-facing diagnostics on stderr.

The console resolves sys.stderr on every write, so redirected or captured
streams are honored. Color is only used when stderr is a terminal.
"""

from rich.console import Console

_stderr = Console(stderr=True, highlight=False, markup=False, emoji=False, soft_wrap=True)


def error(message: str) -> None:
    _stderr.print(message, style="red")


def warn(message: str) -> None:
    _stderr.print(message, style="yellow")


def plain(message: str) -> None:
    _stderr.print(message)
