"""
Line-level data models

Value types passed between the line source, the context providers and the
compositor. Every provider keeps its own entries; a Line is immutable so the
same instance may sit in several providers at once.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Line:
    """
    One numbered line of input

    Attributes:
        number: 1-based line number within the current input stream
        text: Line text without its line terminator

    Example:
        >>> Line(number=3, text="    return x")
        Line(number=3, text='    return x')
    """
    number: int
    text: str


class Action(Enum):
    """
    Outcome of a provider's pre_line() hook

    SKIP aborts all remaining work for the line: no matching and no
    post_line() on any provider.
    """
    CONTINUE = "continue"
    SKIP = "skip"


class DirectiveKind(Enum):
    """Classification of a preprocessor or template directive line"""
    IF = "if"          # #if, #ifdef, {% if %}
    ELSE = "else"      # #else, #elif, {% else %}
    ENDIF = "endif"    # #endif, {% endif %}
    OTHER = "other"    # #include, #define, {% for %}, ...


@dataclass
class OutlineEntry:
    """Ancestor candidate held by the outline context"""
    line: Line
    indentation: int


@dataclass
class DirectiveEntry:
    """Open directive branch held by the directive context"""
    line: Line
    level: int


@dataclass
class WindowEntry:
    """
    Buffered line held by the window context

    Attributes:
        line: The buffered line
        forced: Print the line when it leaves the window even without a
                further match (trailing context of an earlier match)
    """
    line: Line
    forced: bool = False


def indentation_calculate(text: str) -> Optional[int]:
    """
    Offset of the first non-whitespace character of a line

    Args:
        text: Line text

    Returns:
        Indentation as character offset, or None for blank and
        whitespace-only lines

    Example:
        >>> indentation_calculate("    foo")
        4
        >>> indentation_calculate("   ") is None
        True
    """
    stripped = text.lstrip()
    if not stripped:
        return None
    return len(text) - len(stripped)


def startsWith_word(text: str, prefix: str) -> bool:
    """
    Check that text starts with prefix followed by a word boundary

    The character right after the prefix, if there is one, must not be an
    ASCII letter or digit, so "ifoo" does not start with the word "if".

    Example:
        >>> startsWith_word("if x:", "if")
        True
        >>> startsWith_word("ifoo", "if")
        False
    """
    if not text.startswith(prefix):
        return False
    rest = text[len(prefix):]
    if not rest:
        return True
    following = rest[0]
    return not (following.isascii() and following.isalnum())
