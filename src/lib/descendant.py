"""
Descendant context: the indented body below a match

After a match, every following line indented deeper than the matched line
is printed, up to the first non-blank line that is not deeper. Useful to
see a whole function or block whose header matched.

Paragraph breaks are switched off while this context is enabled; they do
not combine well with the buffered body lines.
"""

from typing import Iterator, List, Optional

from ..models.line import Action, Line
from .context import Context, Emit


class DescendantContext(Context):
    """
    Buffer of lines nested under the last match

    Attributes:
        last_indentation: Indentation of the last non-blank line seen
        threshold: Indentation of the match that armed the context,
                   None while disarmed
        buffer: Descendant lines not printed yet
    """

    def __init__(self, emit: Emit) -> None:
        self.emit = emit
        self.last_indentation = 0
        self.threshold: Optional[int] = None
        self.buffer: List[Line] = []

    def pre_line(self, line: Line, indentation: Optional[int]) -> Action:
        if indentation is not None:
            self.last_indentation = indentation
        return Action.CONTINUE

    def post_line(self, line: Line, indentation: Optional[int]) -> None:
        if self.threshold is None:
            return
        if indentation is None or indentation > self.threshold:
            self.buffer.append(line)
        else:
            self.threshold = None

    def dump(self) -> Iterator[Line]:
        return iter(self.buffer)

    def clear(self) -> None:
        # Shallowest armed match wins: a match inside the body keeps the outer scope
        if self.threshold is None:
            self.threshold = self.last_indentation
        else:
            self.threshold = min(self.threshold, self.last_indentation)
        self.buffer.clear()

    def end(self) -> None:
        for line in self.buffer:
            self.emit(line)
        self.buffer.clear()
