"""
Compositor: one forward pass over a line stream

Drives the context providers and the matcher line by line and merges the
providers' context into a single output stream:

    line -> pre_line on every provider (first SKIP drops the line)
         -> matcher
         -> match:    heading, break, merged dumps, match line, clear
            no match: post_line on every provider
    end  -> end on every provider

Providers run in a fixed order, window -> directive -> outline ->
descendant; the order decides whose SKIP wins and when the window flushes
trailing lines relative to the directive scope.

Example:
    >>> import io
    >>> out = io.StringIO()
    >>> options = SearchOptions()
    >>> compositor = Compositor(PatternMatcher("bla"), Printer(out, options), options)
    >>> compositor.search_stream(["foo", "  bar", "    bla"])
    True
    >>> print(out.getvalue(), end="")
       1: foo
       2:   bar
       3:     bla
"""

import heapq
from itertools import groupby
from operator import attrgetter
from typing import Iterable, Iterator, List, Optional, Tuple

from ..models.line import Action, Line, indentation_calculate
from ..models.options import SearchOptions
from .context import Context
from .descendant import DescendantContext
from .directive import DirectiveContext
from .log import LOG
from .matcher import PatternMatcher
from .outline import OutlineContext
from .printer import FilePath, Printer
from .source import lines_read
from .window import WindowContext


def contexts_merge(dumps: Iterable[Iterable[Line]]) -> Iterator[Line]:
    """
    Merge sorted context sequences into one, coalescing equal line numbers

    Args:
        dumps: Line sequences, each ascending by line number

    Returns:
        Iterator over lines ascending by number, one line per number

    Example:
        >>> a = [Line(1, "foo"), Line(4, "qux")]
        >>> b = [Line(3, "boo"), Line(4, "qux")]
        >>> [line.number for line in contexts_merge([a, b])]
        [1, 3, 4]
    """
    merged = heapq.merge(*dumps, key=attrgetter("number"))
    for _, same_number in groupby(merged, key=attrgetter("number")):
        yield next(same_number)


class Compositor:
    """
    Runs the context providers and the matcher over input streams

    Attributes:
        matcher: Pattern matcher
        printer: Output printer, shared across streams
        options: Search options
        file: File of the current stream, None for standard input
        contexts: Providers of the current stream, in processing order
        matches_found: The current stream had at least one match
        saw_blank: A blank line was read since the last match
    """

    def __init__(
        self, matcher: PatternMatcher, printer: Printer, options: SearchOptions
    ) -> None:
        self.matcher = matcher
        self.printer = printer
        self.options = options
        self.file: Optional[FilePath] = None
        self.contexts: List[Context] = []
        self.matches_found = False
        self.saw_blank = False

    def contexts_build(self) -> List[Context]:
        """Create fresh providers for one input stream"""
        contexts: List[Context] = [
            WindowContext(self.context_emit, before=self.options.before, after=self.options.after),
            DirectiveContext(self.options.directives),
            OutlineContext(smart_branches=self.options.smart_branches),
        ]
        if self.options.descendants:
            contexts.append(DescendantContext(self.context_emit))
        return contexts

    def stream_reset(self, file: Optional[FilePath]) -> None:
        """Prepare for a new input stream"""
        self.file = file
        self.contexts = self.contexts_build()
        self.matches_found = False
        self.saw_blank = False
        self.printer.reset()

    def context_emit(self, line: Line) -> None:
        """
        Print a context line unless it was printed already

        Two providers may hand out the same line at different times (e.g. a
        trailing window line that is also a buffered descendant); printed
        output must stay strictly ascending.
        """
        if line.number <= self.printer.last_printed:
            return
        self.printer.print_context(self.file, line.number, line.text)

    def match_emit(self, line: Line, spans: List[Tuple[int, int]]) -> None:
        """Print a match with its merged context, then reset the providers"""
        if not self.matches_found and self.file is not None:
            self.printer.print_heading(self.file)
        if self.saw_blank and self.matches_found:
            self.printer.print_break()

        for context_line in contexts_merge(context.dump() for context in self.contexts):
            self.context_emit(context_line)
        self.printer.print_match(self.file, line.number, line.text, spans)

        for context in self.contexts:
            context.clear()
        self.saw_blank = False
        self.matches_found = True

    def line_process(self, line: Line) -> None:
        """Run one line through the providers and the matcher"""
        indentation = indentation_calculate(line.text)
        if indentation is None:
            self.saw_blank = True

        for context in self.contexts:
            if context.pre_line(line, indentation) is Action.SKIP:
                return

        spans = self.matcher.find_matches(line.text)
        if spans:
            self.match_emit(line, spans)
        else:
            for context in self.contexts:
                context.post_line(line, indentation)

    def search(self, lines: Iterable[Line], file: Optional[FilePath] = None) -> bool:
        """
        Search one input stream

        Args:
            lines: Numbered lines, see lines_read()
            file: File the stream was read from, None for standard input

        Returns:
            True if at least one line matched

        Raises:
            OSError: On read or write failures, aborting the stream
        """
        self.stream_reset(file)
        LOG(f"Searching {file if file is not None else '<stdin>'}", level=2)

        for line in lines:
            self.line_process(line)

        for context in self.contexts:
            context.end()

        return self.matches_found

    def search_stream(self, stream: Iterable[str], file: Optional[FilePath] = None) -> bool:
        """Search an open text stream, numbering its lines from 1"""
        return self.search(lines_read(stream), file)
