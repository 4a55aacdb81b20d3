"""
Search option models

Enumerations for the choice-valued command line flags and the SearchOptions
dataclass consumed by the compositor and the printer.
"""

from enum import Enum
from dataclasses import dataclass


class DirectiveMode(Enum):
    """
    How preprocessor/template directive lines are treated

    PRESERVE: directives are ordinary text lines
    IGNORE:   directive lines are skipped entirely
    CONTEXT:  if/else directives form a parallel ancestor chain
    """
    PRESERVE = "preserve"
    IGNORE = "ignore"
    CONTEXT = "context"


class ColorMode(Enum):
    """When to style output with terminal escapes"""
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


class ColorSchemeName(Enum):
    """Built-in color schemes"""
    GREY = "grey"
    COLORED = "colored"


class FilenameMode(Enum):
    """
    Where the file name is printed

    NO:       never
    PER_FILE: heading before the first match of each file
    PER_LINE: as a prefix of every printed line
    """
    NO = "no"
    PER_FILE = "per-file"
    PER_LINE = "per-line"


def choices_list(enum_cls: type) -> list[str]:
    """Values of an option enum, for argparse choices"""
    return [member.value for member in enum_cls]


@dataclass
class SearchOptions:
    """
    Options that shape which lines are printed around a match

    Defaults enable the minimal feature set; the command line turns smart
    branches and directive context on by default.

    Attributes:
        smart_branches: Keep equal-indentation sibling branches (if/else,
                        switch/case) as context for each other
        directives: Directive line policy
        before: Number of leading lines to print before a match
        after: Number of trailing lines to print after a match
        descendants: Print every deeper-indented line after a match
        breaks: Print an empty line where the source had a blank line
                between two printed sections
        ellipsis: Print a marker where lines were elided
        filename_mode: Where to print the file name
    """
    smart_branches: bool = False
    directives: DirectiveMode = DirectiveMode.PRESERVE
    before: int = 0
    after: int = 0
    descendants: bool = False
    breaks: bool = False
    ellipsis: bool = False
    filename_mode: FilenameMode = FilenameMode.NO
