"""
Output formatting

The Printer writes numbered context and match lines, highlights match
spans, and marks discontinuities: an ellipsis where lines were elided, an
empty line ("break") where the source had a blank line between two printed
sections. Line numbers must strictly increase within one input stream; the
printer tracks the last printed number to detect gaps.

Terminal styling comes from pygments.console escape codes.
"""

from dataclasses import dataclass
from os import PathLike
from typing import Optional, Sequence, TextIO, Tuple, Union

from pygments.console import codes

from ..config import appsettings
from ..models.options import ColorSchemeName, FilenameMode, SearchOptions
from .errors import OutputOrderError

FilePath = Union[str, PathLike]
Style = Tuple[str, str]


@dataclass(frozen=True)
class ColorScheme:
    """
    Start/end escape sequences for each styled element

    Attributes:
        filename: File name in headings and per-line prefixes
        matched_part: Matched spans inside a match line
        context_line: Whole context lines and ellipsis markers
    """
    filename: Style = ("", "")
    matched_part: Style = ("", "")
    context_line: Style = ("", "")


PLAIN_SCHEME = ColorScheme()

GREY_SCHEME = ColorScheme(
    filename=(codes["underline"], codes["reset"]),
    matched_part=(codes["bold"], codes["reset"]),
    context_line=(codes["faint"], codes["reset"]),
)

COLORED_SCHEME = ColorScheme(
    filename=(codes["blue"], codes["reset"]),
    matched_part=(codes["red"], codes["reset"]),
    context_line=(codes["faint"], codes["reset"]),
)


def colorScheme_get(name: ColorSchemeName, use_colors: bool) -> ColorScheme:
    """
    Resolve the color scheme to print with

    Args:
        name: Requested scheme
        use_colors: Whether escapes may be written at all

    Returns:
        The requested scheme, or PLAIN_SCHEME when colors are off
    """
    if not use_colors:
        return PLAIN_SCHEME
    if name is ColorSchemeName.COLORED:
        return COLORED_SCHEME
    return GREY_SCHEME


class Printer:
    """
    Formats search results onto a text stream

    Attributes:
        output: Destination stream
        options: Search options (breaks, ellipsis, filename mode)
        scheme: Color scheme
        last_printed: Number of the last printed line, 0 before any
        was_break: A break was printed and no line since
    """

    def __init__(
        self,
        output: TextIO,
        options: SearchOptions,
        scheme: ColorScheme = PLAIN_SCHEME,
        ellipsis_marker: Optional[str] = None,
        number_width: Optional[int] = None,
    ) -> None:
        self.output = output
        self.options = options
        self.scheme = scheme
        self.ellipsis_marker = (
            ellipsis_marker if ellipsis_marker is not None else appsettings.ellipsis_marker
        )
        self.number_width = number_width or appsettings.line_number_width
        self.last_printed = 0
        self.was_break = False

    def reset(self) -> None:
        """Forget gap state; called at the start of every input stream"""
        self.last_printed = 0
        self.was_break = False

    def prefix_make(self, file: Optional[FilePath]) -> str:
        """File name prefix for per-line mode, empty otherwise"""
        if file is None or self.options.filename_mode is not FilenameMode.PER_LINE:
            return ""
        start, end = self.scheme.filename
        return f"{start}{file}{end}:"

    def order_check(self, line_number: int) -> None:
        """
        Reject a line number that does not follow the last printed one

        Raises:
            OutputOrderError: If line_number does not follow the last line
        """
        if line_number <= self.last_printed:
            raise OutputOrderError(
                f"line {line_number} printed after line {self.last_printed}"
            )

    def ellipsis_maybe(self, line_number: int) -> None:
        """Print an ellipsis if line_number does not follow the last line"""
        if self.was_break:
            self.was_break = False
            return
        if line_number > self.last_printed + 1:
            self.print_ellipsis()

    def print_context(self, file: Optional[FilePath], line_number: int, text: str) -> None:
        """Print a context line"""
        self.order_check(line_number)
        self.ellipsis_maybe(line_number)
        start, end = self.scheme.context_line
        self.output.write(
            f"{self.prefix_make(file)}{start}{line_number:>{self.number_width}}: {text}{end}\n"
        )
        self.last_printed = line_number

    def print_match(
        self,
        file: Optional[FilePath],
        line_number: int,
        text: str,
        spans: Sequence[Tuple[int, int]],
    ) -> None:
        """
        Print a matching line with its match spans highlighted

        Args:
            file: File the line comes from, None for standard input
            line_number: Line number
            text: Line text
            spans: Ordered, non-overlapping (start, end) offsets
        """
        self.order_check(line_number)
        self.ellipsis_maybe(line_number)

        start, end = self.scheme.matched_part
        parts = []
        pos = 0
        for span_start, span_end in spans:
            parts.append(text[pos:span_start])
            parts.append(f"{start}{text[span_start:span_end]}{end}")
            pos = span_end
        parts.append(text[pos:])

        self.output.write(
            f"{self.prefix_make(file)}{line_number:>{self.number_width}}: {''.join(parts)}\n"
        )
        self.last_printed = line_number

    def print_break(self) -> None:
        """Print an empty line, replacing the ellipsis before the next line"""
        if self.options.breaks:
            self.output.write("\n")
            self.was_break = True

    def print_ellipsis(self) -> None:
        if self.options.ellipsis:
            start, end = self.scheme.context_line
            self.output.write(f"{' ' * (self.number_width - 1)}{start}{self.ellipsis_marker}{end}\n")

    def print_heading(self, file: FilePath) -> None:
        """Print the file name before the first match of a file"""
        if self.last_printed != 0:
            raise OutputOrderError(f"heading for {file} after line {self.last_printed}")
        if self.options.filename_mode is not FilenameMode.PER_FILE:
            return
        start, end = self.scheme.filename
        self.output.write(f"\n{start}{file}{end}\n\n")
