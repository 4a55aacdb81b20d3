"""
Shared fixtures

The `scenario` fixture runs a search over an annotated listing in which
every line starts with a marker:

    "+ "  line is part of the input and must be printed
    "- "  line is part of the input and must not be printed
    "~ "  line is not part of the input but must be printed verbatim
          (ellipsis markers, breaks)

A marker alone ("-" or "~") stands for an empty line.
"""

import io
import textwrap
from typing import Callable, Tuple

import pytest

from outlinegrep.lib.compositor import Compositor
from outlinegrep.lib.matcher import PatternMatcher
from outlinegrep.lib.printer import Printer
from outlinegrep.models import SearchOptions


def listing_split(listing: str) -> Tuple[str, str]:
    """
    Split an annotated listing into input text and expected output

    Returns:
        Tuple of (input text, expected output)
    """
    source = []
    expected = []
    number = 0
    for raw in textwrap.dedent(listing).strip("\n").splitlines():
        marker, text = raw[:1], raw[2:]
        assert marker in ("+", "-", "~"), f"bad listing line: {raw!r}"
        if marker in ("+", "-"):
            number += 1
            source.append(text + "\n")
        if marker == "+":
            expected.append(f"{number:>4}: {text}\n")
        elif marker == "~":
            expected.append(text + "\n")
    return "".join(source), "".join(expected)


def search_run(pattern: str, text: str, file=None, **overrides) -> str:
    """Search text with plain printing, returning everything printed"""
    options = SearchOptions(**overrides)
    output = io.StringIO()
    printer = Printer(output, options, ellipsis_marker="…", number_width=4)
    compositor = Compositor(PatternMatcher(pattern), printer, options)
    compositor.search_stream(io.StringIO(text), file)
    return output.getvalue()


@pytest.fixture
def scenario() -> Callable[..., None]:
    """Check an annotated listing: scenario(pattern, listing, **options)"""

    def check(pattern: str, listing: str, **overrides) -> None:
        text, expected = listing_split(listing)
        assert search_run(pattern, text, **overrides) == expected

    return check


@pytest.fixture
def run() -> Callable[..., str]:
    """Search raw text: run(pattern, text, file=None, **options) -> output"""
    return search_run
