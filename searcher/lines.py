"""
lines.py

Splits a file's byte stream into decoded lines, flagging content that looks
binary (NUL bytes) or is not valid UTF-8.
"""

from dataclasses import dataclass
from typing import BinaryIO, Iterator, Union

from searcher.errors import AbortReason

ENCODING = "utf-8"


@dataclass(frozen=True)
class Line:
    content: str
    index: int  # zero-based


def _chomp(raw: bytes) -> bytes:
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    if raw.endswith(b"\n"):
        return raw[:-1]
    return raw


def read_lines(handle: BinaryIO) -> Iterator[Union[Line, AbortReason]]:
    """
    Yield one Line per `\\n`-terminated record. On the first binary or
    undecodable record an AbortReason is yielded instead and iteration stops.
    """
    for index, raw in enumerate(handle):
        raw = _chomp(raw)
        if b"\x00" in raw:
            yield AbortReason.BINARY
            return
        try:
            content = raw.decode(ENCODING)
        except UnicodeDecodeError:
            yield AbortReason.ENCODING
            return
        yield Line(content=content, index=index)
