"""
formatter.py

Turns lines into their terminal representation and writes them out.

Plain mode produces ordinary strings. Styled mode builds `rich` Text objects so
that styling (filenames, line numbers and, with --color, match highlights) is
expressed as spans rather than hand-written escape codes.
"""

import os
from typing import IO, Optional, Union

from rich.console import Console
from rich.text import Text

from searcher.config import SearchConfig
from searcher.errors import MatchingEngineError
from searcher.matcher import PatternMatcher

SEPARATOR = "--"
MATCH_GLYPH = ":"
CONTEXT_GLYPH = "-"

HEADER_STYLE = "bold magenta"
FILENAME_STYLE = "magenta"
LINE_NUMBER_STYLE = "green"
MATCH_STYLE = "bold red on yellow"

Rendered = Union[str, Text]


def display_name(path: str) -> str:
    """
    Printable form of a path. Bytes that are not valid UTF-8 come back from
    the filesystem as surrogate escapes; they are shown as `\\xNN` instead.
    """
    return os.fsencode(path).decode("utf-8", "backslashreplace")


def wants_style(config: SearchConfig, stream: IO[str]) -> bool:
    """Decorate output when color was requested or when writing to a terminal."""
    if config.color:
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class OutputFormatter:
    """
    Formats headers, separators and numbered lines for one run.
    `styled` decorates filenames and line numbers; match highlighting
    additionally needs `config.color`.
    """

    def __init__(self, config: SearchConfig, matcher: PatternMatcher, styled: Optional[bool] = None):
        self.config = config
        self.matcher = matcher
        self.styled = config.color if styled is None else styled

    def format_header(self, filename: str) -> Rendered:
        filename = display_name(filename)
        if not self.styled:
            return filename
        return Text(filename, style=HEADER_STYLE)

    def format_separator(self) -> Rendered:
        return SEPARATOR

    def format_line(self, content: str, index: int, is_match: bool, filename: str) -> Rendered:
        line_num = str(index + 1)
        glyph = MATCH_GLYPH if is_match else CONTEXT_GLYPH
        filename = display_name(filename)

        if not self.styled:
            if self.config.no_heading:
                return f"{filename}{glyph}{line_num}{glyph}{content}"
            return f"{line_num}{glyph}{content}"

        text = Text()
        if self.config.no_heading:
            text.append(filename, style=FILENAME_STYLE)
            text.append(glyph)
        text.append(line_num, style=LINE_NUMBER_STYLE)
        text.append(glyph)
        if is_match and self.config.color:
            text.append_text(self._highlight(content))
        else:
            text.append_text(Text(content))
        return text

    def _highlight(self, content: str) -> Text:
        """Style every match span; on any engine failure return the content unstyled."""
        text = Text(content)
        try:
            spans = self.matcher.spans(content)
        except MatchingEngineError:
            return Text(content)
        for start, end in spans:
            text.stylize(MATCH_STYLE, start, end)
        return text


class TerminalPrinter:
    """
    Single writer for the run's output stream, one formatted line per call.
    Styled lines go through a rich Console that always emits ANSI codes, even
    when the stream is not a terminal. Each line is flushed as it is written.
    """

    def __init__(self, stream: IO[str], color: bool = False):
        self.stream = stream
        self.color = color
        self._console: Optional[Console] = None
        if color:
            self._console = Console(
                file=stream,
                force_terminal=True,
                color_system="standard",
                highlight=False,
                markup=False,
                emoji=False,
                soft_wrap=True,
            )
        self.lines_written = 0

    def write(self, rendered: Rendered) -> None:
        if isinstance(rendered, Text) and self._console is not None:
            self._console.print(rendered)
        else:
            plain = rendered.plain if isinstance(rendered, Text) else rendered
            self.stream.write(plain + "\n")
        self.stream.flush()
        self.lines_written += 1
