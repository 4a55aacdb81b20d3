"""
Outline context: ancestors by indentation

Keeps the chain of lines enclosing the most recent line, the way a document
outline nests headings:

    a          <- stack[0], indentation 0
      b
        c
      d        <- stack[1], indentation 2
        e      <- stack[2], indentation 4
    ---------
        f      <- current line

The stack is always sorted by ascending indentation. Without smart branches
indentation strictly increases; with smart branches equal indentation may
repeat, so that e.g. an "if" line survives as context of its "else" branch.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from ..models.line import Action, Line, OutlineEntry, startsWith_word
from .context import Context

BranchTable = Sequence[Tuple[str, Sequence[str]]]

# Continuation prefix -> ancestor prefixes kept at the same indentation
SMART_BRANCH_PREFIXES: BranchTable = (
    ("} else ", ("if", "} else if")),
    ("else:", ("if", "elif", "else if")),
    ("elif", ("if", "elif")),
    ("case", ("switch",)),
    ("default", ("switch",)),
    ("except", ("try", "except")),
    ("finally", ("try", "except")),
)


class OutlineContext(Context):
    """
    Indentation-based ancestor stack

    Blank lines are transparent: they neither truncate nor enter the stack.
    """

    def __init__(
        self,
        smart_branches: bool = False,
        branch_prefixes: BranchTable = SMART_BRANCH_PREFIXES,
    ) -> None:
        """
        Args:
            smart_branches: Retain same-indentation sibling branches
            branch_prefixes: Table of (continuation prefix, ancestor prefixes)
        """
        self.smart_branches = smart_branches
        self.branch_prefixes = branch_prefixes
        self.stack: List[OutlineEntry] = []

    def sibling_retains(self, entry: OutlineEntry, line: Line, indentation: int) -> bool:
        """
        Check whether an equal-indentation entry stays as context of line

        Only the first continuation prefix matching the current line is
        consulted. A line that continues no branch retains nothing.

        Args:
            entry: Stack entry with the same indentation as line
            line: Current line
            indentation: Indentation of the current line

        Returns:
            True if the entry opens a branch the current line continues
        """
        stripped = line.text[indentation:]
        stripped_entry = entry.line.text[entry.indentation:]
        for prefix, ancestor_prefixes in self.branch_prefixes:
            if startsWith_word(stripped, prefix):
                return any(startsWith_word(stripped_entry, p) for p in ancestor_prefixes)
        return False

    def entry_retains(self, entry: OutlineEntry, line: Line, indentation: int) -> bool:
        """Decide whether entry (and everything below it) stays on the stack"""
        if entry.indentation < indentation:
            return True
        if entry.indentation > indentation:
            return False
        if not self.smart_branches:
            return False
        return self.sibling_retains(entry, line, indentation)

    def pre_line(self, line: Line, indentation: Optional[int]) -> Action:
        if indentation is None:
            return Action.CONTINUE

        # Highest entry to keep; everything above it goes
        top = len(self.stack)
        while top > 0 and not self.entry_retains(self.stack[top - 1], line, indentation):
            top -= 1
        del self.stack[top:]

        return Action.CONTINUE

    def post_line(self, line: Line, indentation: Optional[int]) -> None:
        if indentation is None:
            return
        # pre_line already dropped every entry deeper than this line
        self.stack.append(OutlineEntry(line=line, indentation=indentation))

    def dump(self) -> Iterator[Line]:
        return (entry.line for entry in self.stack)

    def clear(self) -> None:
        self.stack.clear()
