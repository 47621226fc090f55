"""
Bounded lookback buffer holding candidate "before" context lines.
"""

from collections import deque
from typing import Deque, List, Optional

from searcher.lines import Line


class ContextBuffer:
    """FIFO of at most `capacity` lines, oldest first. Overflow drops the oldest entry."""

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self._lines: Deque[Line] = deque()

    def push(self, line: Line) -> None:
        if self.capacity == 0:
            return
        self._lines.append(line)
        if len(self._lines) > self.capacity:
            self._lines.popleft()

    def drain(self) -> List[Line]:
        """Return the buffered lines, oldest first, and empty the buffer."""
        drained = list(self._lines)
        self._lines.clear()
        return drained

    def peek_oldest_index(self) -> Optional[int]:
        return self._lines[0].index if self._lines else None

    def __len__(self) -> int:
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)
