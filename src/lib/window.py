"""
Window context: fixed number of lines before and after a match

This is the context plain grep prints with -B/-A/-C. It ignores structure
entirely; blank lines occupy slots like any other line.

Lines are held in a FIFO bounded by line-number distance from the current
line. Lines following a match are flagged as forced: they are printed when
they leave the window even if no further match pulls them out with dump().
"""

from collections import deque
from typing import Deque, Iterator, Optional

from ..models.line import Action, Line, WindowEntry
from .context import Context, Emit


class WindowContext(Context):
    """
    Sliding before/after window

    Attributes:
        before: Leading lines to keep for the next match
        after: Trailing lines to force-print after a match
        trailing_left: Trailing lines of the last match still to flag
        buffer: Window entries ordered by line number
    """

    def __init__(self, emit: Emit, before: int = 0, after: int = 0) -> None:
        """
        Args:
            emit: Callback printing a line as context
            before: Number of leading lines
            after: Number of trailing lines
        """
        self.emit = emit
        self.before = before
        self.after = after
        self.trailing_left = 0
        self.buffer: Deque[WindowEntry] = deque()

    def pre_line(self, line: Line, indentation: Optional[int]) -> Action:
        while self.buffer and self.buffer[0].line.number < line.number - self.before:
            entry = self.buffer.popleft()
            if entry.forced:
                self.emit(entry.line)
        return Action.CONTINUE

    def post_line(self, line: Line, indentation: Optional[int]) -> None:
        self.buffer.append(WindowEntry(line=line, forced=self.trailing_left > 0))
        if self.trailing_left > 0:
            self.trailing_left -= 1

    def dump(self) -> Iterator[Line]:
        return (entry.line for entry in self.buffer)

    def clear(self) -> None:
        # Buffered lines were just printed as leading context
        self.buffer.clear()
        self.trailing_left = self.after

    def end(self) -> None:
        for entry in self.buffer:
            if entry.forced:
                self.emit(entry.line)
        self.buffer.clear()
