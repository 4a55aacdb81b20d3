"""
Context provider lifecycle

A context provider tracks which already-seen lines are still relevant as
context for a future match. The compositor drives every provider through the
same per-line lifecycle:

    pre_line   - update state for the new line, before matching;
                 may ask for the line to be skipped entirely
    post_line  - the line did not match: retain it if relevant
    dump       - the line matched: yield the current context lines
    clear      - called after dump, context has been printed
    end        - end of input: flush anything still pending

Providers that must print lines outside of a match (trailing window lines,
descendants at end of input) do so through the emit callback handed to them
at construction.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional

from ..models.line import Action, Line

Emit = Callable[[Line], None]


class Context(ABC):
    """Base class for context providers"""

    @abstractmethod
    def pre_line(self, line: Line, indentation: Optional[int]) -> Action:
        """
        Handle a line before it is checked for matches

        Update state for the new line without adding the line to the
        context yet. If the line matches, dump() is called next; otherwise
        post_line() is.

        Args:
            line: Current line
            indentation: Indentation of the line, None when blank

        Returns:
            Action.SKIP to drop the line from all further processing,
            Action.CONTINUE otherwise
        """

    @abstractmethod
    def post_line(self, line: Line, indentation: Optional[int]) -> None:
        """Retain a non-matching line, if it is relevant"""

    @abstractmethod
    def dump(self) -> Iterator[Line]:
        """Yield current context lines in ascending line number order"""

    @abstractmethod
    def clear(self) -> None:
        """Forget context that was just printed with a match"""

    def end(self) -> None:
        """Flush pending lines at end of input"""
        return None
