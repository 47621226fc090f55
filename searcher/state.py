"""
state.py

The per-line state machine behind a file scan.

Each incoming line is handed to `transition` together with whether it matched.
The function updates the per-file ScanState, returns the updated RunState and
the list of things to print, in order. Nothing here touches the output stream,
so separator and cross-file placement can be tested directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union

from searcher.config import SearchConfig
from searcher.context import ContextBuffer
from searcher.lines import Line


# ---------- modes ----------

@dataclass(frozen=True)
class Idle:
    """No after-context pending; non-matching lines go to the lookback buffer."""


@dataclass(frozen=True)
class AfterContext:
    """A match was printed and `remaining` trailing lines are still owed."""
    remaining: int


Mode = Union[Idle, AfterContext]


# ---------- emissions ----------

@dataclass(frozen=True)
class Header:
    filename: str


@dataclass(frozen=True)
class Separator:
    pass


@dataclass(frozen=True)
class PrintLine:
    line: Line
    is_match: bool


Emission = Union[Header, Separator, PrintLine]


# ---------- state ----------

@dataclass(frozen=True)
class RunState:
    """State shared by every file in one run. Threaded through each scan."""
    has_printed_any_match: bool = False


@dataclass
class ScanState:
    filename: str
    buffer: ContextBuffer
    mode: Mode = field(default_factory=Idle)
    last_printed_line_index: Optional[int] = None
    file_header_printed: bool = False

    @classmethod
    def fresh(cls, filename: str, config: SearchConfig) -> ScanState:
        return cls(filename=filename, buffer=ContextBuffer(config.before_context))


def _needs_gap_separator(scan: ScanState, line: Line, config: SearchConfig) -> bool:
    if not config.context_enabled or scan.last_printed_line_index is None:
        return False
    first_index = scan.buffer.peek_oldest_index()
    if first_index is None:
        first_index = line.index
    return first_index > scan.last_printed_line_index + 1


def _on_match(
    scan: ScanState,
    run: RunState,
    line: Line,
    config: SearchConfig,
) -> Tuple[List[Emission], RunState]:
    out: List[Emission] = []

    if not config.no_heading and not scan.file_header_printed:
        out.append(Header(scan.filename))
        scan.file_header_printed = True

    if _needs_gap_separator(scan, line, config):
        out.append(Separator())

    # first block of this file after another file already printed something
    if (
        config.no_heading
        and config.context_enabled
        and run.has_printed_any_match
        and not scan.file_header_printed
    ):
        out.append(Separator())
    scan.file_header_printed = True

    for buffered in scan.buffer.drain():
        out.append(PrintLine(buffered, is_match=False))
        scan.last_printed_line_index = buffered.index

    out.append(PrintLine(line, is_match=True))
    scan.last_printed_line_index = line.index

    scan.mode = AfterContext(config.after_context) if config.after_context > 0 else Idle()
    return out, replace(run, has_printed_any_match=True)


def _on_miss(scan: ScanState, line: Line) -> List[Emission]:
    mode = scan.mode
    if isinstance(mode, AfterContext):
        remaining = mode.remaining - 1
        scan.mode = AfterContext(remaining) if remaining > 0 else Idle()
        scan.last_printed_line_index = line.index
        return [PrintLine(line, is_match=False)]

    scan.buffer.push(line)
    return []


def transition(
    scan: ScanState,
    run: RunState,
    line: Line,
    is_match: bool,
    config: SearchConfig,
) -> Tuple[List[Emission], RunState]:
    """Advance the scan by one line. Returns (emissions in print order, run state)."""
    if is_match:
        return _on_match(scan, run, line, config)
    return _on_miss(scan, line), run
