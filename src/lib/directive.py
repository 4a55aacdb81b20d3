"""
Directive context: preprocessor and template conditionals

Preprocessor instructions are usually written at column zero no matter how
deep the surrounding code is nested, so treating them as ordinary lines
wrecks the outline stack. This provider recognises them and, depending on
the mode, passes them through, drops them, or keeps the open if/else
branches as a parallel chain of ancestors scoped by nesting level:

    #if A              <- level 1
    #  if B            <- level 2
    #  else            <- level 2
    #  endif           -> drops level 2 entries
    #else              <- level 1
"""

import re
from typing import Iterator, List, Optional, Pattern, Sequence, Tuple

from ..models.line import Action, DirectiveEntry, DirectiveKind, Line
from ..models.options import DirectiveMode
from .context import Context
from .log import LOG

DirectiveTable = Sequence[Tuple[DirectiveKind, Pattern[str]]]

# Checked in order against the indentation-stripped line; first hit wins
DIRECTIVE_PATTERNS: DirectiveTable = (
    (DirectiveKind.IF, re.compile(r"^(?:#|\{%-?)\s*if(?:n?def)?\b")),
    (DirectiveKind.ELSE, re.compile(r"^(?:#|\{%-?)\s*(?:else|elif|elsif)\b")),
    (DirectiveKind.ENDIF, re.compile(r"^(?:#|\{%-?)\s*endif\b")),
    (DirectiveKind.OTHER, re.compile(r"^(?:#|\{%-?)")),
)


class DirectiveContext(Context):
    """
    Nested if/else/endif scope stack

    Attributes:
        mode: Directive handling policy
        patterns: Classification table
        level: Current nesting depth of open if directives
        stack: Open branches, ascending by level
    """

    def __init__(
        self,
        mode: DirectiveMode = DirectiveMode.PRESERVE,
        patterns: DirectiveTable = DIRECTIVE_PATTERNS,
    ) -> None:
        self.mode = mode
        self.patterns = patterns
        self.level = 0
        self.stack: List[DirectiveEntry] = []

    def kind_classify(self, text: str) -> Optional[DirectiveKind]:
        """
        Classify an indentation-stripped line

        Args:
            text: Line text without leading whitespace

        Returns:
            DirectiveKind, or None if the line is not a directive

        Example:
            >>> DirectiveContext().kind_classify("#ifdef FOO")
            <DirectiveKind.IF: 'if'>
            >>> DirectiveContext().kind_classify("{% endif %}")
            <DirectiveKind.ENDIF: 'endif'>
            >>> DirectiveContext().kind_classify("x = 1") is None
            True
        """
        for kind, pattern in self.patterns:
            if pattern.match(text):
                return kind
        return None

    def scope_close(self, line: Line) -> None:
        """Drop branches of the innermost open scope and leave it"""
        if self.level == 0:
            LOG(f"Unbalanced directive at line {line.number}: {line.text.strip()}", level=2)
            self.stack.clear()
            return

        top = len(self.stack)
        while top > 0 and self.stack[top - 1].level >= self.level:
            top -= 1
        del self.stack[top:]
        self.level -= 1

    def pre_line(self, line: Line, indentation: Optional[int]) -> Action:
        if indentation is None or self.mode is DirectiveMode.PRESERVE:
            return Action.CONTINUE

        kind = self.kind_classify(line.text[indentation:])
        if kind is None:
            return Action.CONTINUE

        if self.mode is DirectiveMode.IGNORE:
            return Action.SKIP

        if kind is DirectiveKind.IF:
            self.level += 1
            self.stack.append(DirectiveEntry(line=line, level=self.level))
        elif kind is DirectiveKind.ELSE:
            self.stack.append(DirectiveEntry(line=line, level=self.level))
        elif kind is DirectiveKind.ENDIF:
            self.scope_close(line)
        return Action.SKIP

    def post_line(self, line: Line, indentation: Optional[int]) -> None:
        # Directive lines never reach post_line: they are skipped in pre_line
        return None

    def dump(self) -> Iterator[Line]:
        return (entry.line for entry in self.stack)

    def clear(self) -> None:
        self.stack.clear()
