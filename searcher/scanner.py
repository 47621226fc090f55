"""
scanner.py

Drives one file through the line state machine and the formatter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from searcher.config import SearchConfig
from searcher.errors import AbortReason, MatchingEngineError
from searcher.formatter import OutputFormatter, TerminalPrinter, display_name
from searcher.instrumentation.console import warn
from searcher.lines import Line, read_lines
from searcher.matcher import PatternMatcher
from searcher.state import Emission, Header, PrintLine, RunState, ScanState, Separator, transition


@dataclass(frozen=True)
class ScanResult:
    path: str
    run_state: RunState
    matches: int = 0
    lines_printed: int = 0
    aborted: Optional[AbortReason] = None
    error: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.aborted is None


class FileScanner:
    """
    Scans files one at a time. Output already flushed for a file stays put
    when the file is later found to be binary; nothing further is printed for it.
    """

    def __init__(self, config: SearchConfig, matcher: PatternMatcher, printer: TerminalPrinter):
        self.config = config
        self.matcher = matcher
        self.printer = printer
        self.formatter = OutputFormatter(config, matcher, styled=printer.color)

    def scan_file(self, path: str, run_state: RunState) -> ScanResult:
        """Scan `path` and return its result along with the updated run state."""
        scan = ScanState.fresh(path, self.config)
        # run_state lives here so a mid-file read error keeps what was already printed
        tally = {"matches": 0, "printed": 0, "run_state": run_state}
        aborted: Optional[AbortReason] = None
        error: Optional[str] = None

        try:
            with open(path, "rb") as fh:
                aborted = self._scan_lines(read_lines(fh), scan, tally)
        except PermissionError as e:
            warn(f"Warning: Could not read {display_name(path)} (Permission denied)")
            aborted, error = AbortReason.PERMISSION, str(e)
        except OSError as e:
            # any other read failure ends this file quietly
            aborted, error = AbortReason.IO, str(e)

        return ScanResult(
            path=path,
            run_state=tally["run_state"],
            matches=tally["matches"],
            lines_printed=tally["printed"],
            aborted=aborted,
            error=error,
        )

    def _scan_lines(self, records: Iterable, scan: ScanState, tally: dict) -> Optional[AbortReason]:
        for record in records:
            if isinstance(record, AbortReason):
                return record

            line: Line = record
            try:
                is_match = self.matcher.matches(line.content)
            except MatchingEngineError:
                return AbortReason.ENGINE

            emissions, tally["run_state"] = transition(scan, tally["run_state"], line, is_match, self.config)
            if is_match:
                tally["matches"] += 1
            tally["printed"] += self._emit(emissions, scan.filename)

        return None

    def _emit(self, emissions: List[Emission], filename: str) -> int:
        printed = 0
        for emission in emissions:
            if isinstance(emission, Header):
                self.printer.write(self.formatter.format_header(emission.filename))
            elif isinstance(emission, Separator):
                self.printer.write(self.formatter.format_separator())
            elif isinstance(emission, PrintLine):
                line = emission.line
                self.printer.write(
                    self.formatter.format_line(line.content, line.index, emission.is_match, filename)
                )
                printed += 1
        return printed
