"""
Line sources

Numbered line streams from files or standard input. Files are decoded as
strict UTF-8: undecodable input is an error, not silently replaced.
"""

import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO

from ..models.line import Line

STDIN_NAME = "-"


def input_isStdin(path: Optional[str]) -> bool:
    """Check whether an input argument denotes standard input"""
    return path is None or path == STDIN_NAME


def input_open(path: Optional[str]) -> TextIO:
    """
    Open an input for reading

    Args:
        path: File path, or None/"-" for standard input

    Returns:
        Text stream; the caller closes files, standard input stays open

    Raises:
        OSError: If the file cannot be opened
    """
    if input_isStdin(path):
        return sys.stdin
    return Path(path).open("r", encoding="utf-8", newline="\n")


def lines_read(stream: Iterable[str]) -> Iterator[Line]:
    """
    Number the lines of a stream starting at 1

    Line terminators ("\\n" or "\\r\\n") are stripped.

    Example:
        >>> list(lines_read(["a\\n", "b\\r\\n", "c"]))
        [Line(number=1, text='a'), Line(number=2, text='b'), Line(number=3, text='c')]
    """
    for number, text in enumerate(stream, start=1):
        if text.endswith("\n"):
            text = text[:-1]
            if text.endswith("\r"):
                text = text[:-1]
        yield Line(number=number, text=text)
