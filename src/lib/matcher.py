"""
Pattern matching

Thin wrapper over the re module exposing the one capability the compositor
needs: the ordered, non-overlapping match spans of a pattern in a line.
"""

import re
from typing import List, Tuple

from .errors import PatternError

Span = Tuple[int, int]


class PatternMatcher:
    """
    Compiled search pattern

    Attributes:
        pattern: Pattern as given on the command line
        regex: Pattern is a regular expression, otherwise a literal string
        ignore_case: Case-insensitive matching
        whole_word: Matches must start and end on word boundaries
        compiled: Compiled regular expression
    """

    def __init__(
        self,
        pattern: str,
        regex: bool = False,
        ignore_case: bool = False,
        whole_word: bool = False,
    ) -> None:
        """
        Compile the search pattern

        Raises:
            PatternError: If a regular expression pattern is invalid
        """
        self.pattern = pattern
        self.regex = regex
        self.ignore_case = ignore_case
        self.whole_word = whole_word

        source = pattern if regex else re.escape(pattern)
        if whole_word:
            source = rf"\b(?:{source})\b"
        flags = re.IGNORECASE if ignore_case else 0

        try:
            self.compiled = re.compile(source, flags)
        except re.error as e:
            raise PatternError(f"Invalid pattern {pattern!r}: {e}") from e

    def find_matches(self, text: str) -> List[Span]:
        """
        Find all non-overlapping matches in a line

        Empty matches (e.g. from an empty pattern) are kept, so such a
        pattern matches every line.

        Args:
            text: Line text

        Returns:
            Ordered list of (start, end) offsets

        Example:
            >>> PatternMatcher("ab").find_matches("ab cab")
            [(0, 2), (4, 6)]
        """
        return [m.span() for m in self.compiled.finditer(text)]
