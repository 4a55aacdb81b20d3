#!/usr/bin/env python3
"""
outlinegrep - Outline-aware text search

Searches a file (or standard input) for a pattern and prints every matching
line together with the lines needed to understand where it sits: the lines
it is indented under, the if/else branch it belongs to, the preprocessor
conditionals around it, optionally a fixed number of surrounding lines and
the whole indented body below it.

Philosophy:
    - Show structure, not noise: ancestors instead of a blind line window
    - Preprocessor lines are scope, not indentation
    - Same exit codes as grep

Usage:
    outlinegrep [OPTIONS] PATTERN [INPUT]

Examples:
    # Where is this name used, and inside which function/class?
    outlinegrep handle_request server.py

    # Regex, case-insensitive, with two lines of plain context
    outlinegrep -e -i 'timeout\\s*=' -C 2 config.py

    # Whole repository, files pre-filtered by git grep
    outlinegrep -g parse_args .

Environment:
    OUTLINEGREP_OPTIONS  Default options, prepended to the command line
    PAGER, SHELL         Pager command line and the shell used to start it

Exit status:
    0  Some matches found
    1  No matches found
    2  An error occurred
"""

import os
import sys
from typing import List, Optional
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from .config import appsettings
from .lib import Compositor, PatternMatcher, Printer, OutlineGrepError, __version__, LOG, state_connectToLogger
from .lib.errors import StdinPrefilterError
from .lib.pager import Output
from .lib.prefilter import files_find, gitGrepCommand_build
from .lib.printer import colorScheme_get
from .lib.source import input_isStdin, input_open
from .models import (
    ProgramState,
    pipeline,
    SearchOptions,
    DirectiveMode,
    ColorMode,
    ColorSchemeName,
    FilenameMode,
)
from .models.options import choices_list


# Define CLI arguments
parser = ArgumentParser(
    prog="outlinegrep",
    description="outlinegrep - grep that prints matches with their outline context",
    formatter_class=RawDescriptionHelpFormatter,
    epilog="""\
environment variables:
  OUTLINEGREP_OPTIONS  Default options

exit status:
  0                    Some matches found
  1                    No matches found
  2                    An error occurred""",
)

parser.add_argument("pattern", type=str, help="Pattern to search for")

parser.add_argument(
    "input", nargs="?", default="-", type=str, help="File to search in, '-' for standard input"
)

parser.add_argument(
    "-e", "--regex", dest="regex", action="store_true", help="Treat pattern as regular expression"
)

parser.add_argument(
    "-i",
    "--case-insensitive",
    dest="caseInsensitive",
    action="store_true",
    help="Perform case-insensitive matching",
)

parser.add_argument(
    "-w", "--word", dest="wholeWord", action="store_true", help="Search for whole words matching pattern"
)

parser.add_argument(
    "--children",
    dest="children",
    action="store_true",
    help="Show all lines with greater indentation (children) after matching line",
)

parser.add_argument(
    "-B",
    "--before-context",
    dest="beforeContext",
    type=int,
    metavar="NUM",
    help="Show specified number of leading lines before matched one",
)

parser.add_argument(
    "-A",
    "--after-context",
    dest="afterContext",
    type=int,
    metavar="NUM",
    help="Show specified number of trailing lines after matched one",
)

parser.add_argument(
    "-C",
    "--context",
    dest="context",
    type=int,
    metavar="NUM",
    help="Show specified number of leading and trailing lines before/after matched one",
)

parser.add_argument(
    "--color",
    dest="color",
    default=ColorMode.AUTO.value,
    choices=choices_list(ColorMode),
    type=str.lower,
    help="Whether to use colors (default: %(default)s)",
)

parser.add_argument(
    "--color-scheme",
    dest="colorScheme",
    default=ColorSchemeName.GREY.value,
    choices=choices_list(ColorSchemeName),
    type=str.lower,
    help="Color scheme to use (default: %(default)s)",
)

parser.add_argument(
    "--no-pager", dest="noPager", action="store_true", help="Don't use pager even when output is terminal"
)

parser.add_argument(
    "-g", "--use-git-grep", dest="useGitGrep", action="store_true", help="Use git grep for prior search"
)

parser.add_argument("--no-breaks", dest="noBreaks", action="store_true", help="Don't preserve line breaks")

parser.add_argument(
    "--ellipsis", dest="ellipsis", action="store_true", help="Print ellipsis when lines were skipped"
)

filename_group = parser.add_mutually_exclusive_group()

filename_group.add_argument(
    "--print-filename",
    dest="printFilename",
    choices=choices_list(FilenameMode),
    type=str.lower,
    help="When to print filename",
)

filename_group.add_argument(
    "-f",
    dest="printFilename",
    action="store_const",
    const=FilenameMode.PER_FILE.value,
    help="Print filename before first match in file, shortcut for --print-filename=per-file",
)

filename_group.add_argument(
    "-F",
    dest="printFilename",
    action="store_const",
    const=FilenameMode.PER_LINE.value,
    help="Print filename on each line, shortcut for --print-filename=per-line",
)

parser.add_argument(
    "--no-smart-branches",
    dest="noSmartBranches",
    action="store_true",
    help="Don't handle if/if-else/else conditionals specially",
)

parser.add_argument(
    "--preprocessor",
    dest="preprocessor",
    default=DirectiveMode.CONTEXT.value,
    choices=choices_list(DirectiveMode),
    type=str.lower,
    help="How to handle C preprocessor and template instructions (default: %(default)s)",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=0,
    help="Increase diagnostic output on stderr (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate option combinations and resolve derived settings.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - searchOptions: SearchOptions for compositor and printer
            - useColors: Whether to write color escapes
            - usePager: Whether to page output
            - envOK: True if the options are consistent

    Raises:
        StdinPrefilterError: If git grep is requested for standard input

    Exits:
        2 if -C is combined with -A or -B (usage error)
    """

    state = inputstate.copy()

    LOG("Checking options...", level=1)

    if state.context is not None and (state.beforeContext is not None or state.afterContext is not None):
        parser.error("argument -C/--context: not allowed with -A/--after-context or -B/--before-context")

    for value in (state.context, state.beforeContext, state.afterContext):
        if value is not None and value < 0:
            parser.error("context line counts must not be negative")

    if state.useGitGrep and input_isStdin(state.input):
        raise StdinPrefilterError()

    if state.context is not None:
        before = after = state.context
    else:
        before = state.beforeContext or 0
        after = state.afterContext or 0

    if state.printFilename is not None:
        filename_mode = FilenameMode(state.printFilename)
    elif state.useGitGrep:
        filename_mode = FilenameMode.PER_FILE
    else:
        filename_mode = FilenameMode.NO

    state.searchOptions = SearchOptions(
        smart_branches=not state.noSmartBranches,
        directives=DirectiveMode(state.preprocessor),
        before=before,
        after=after,
        descendants=state.children,
        # Breaks are not reliable together with descendant context
        breaks=not state.noBreaks and not state.children,
        ellipsis=state.ellipsis,
        filename_mode=filename_mode,
    )
    LOG(f"Search options: {state.searchOptions}", level=2)

    color_mode = ColorMode(state.color)
    is_tty = sys.stdout.isatty()
    if color_mode is ColorMode.AUTO:
        state.useColors = is_tty
    else:
        state.useColors = color_mode is ColorMode.ALWAYS

    state.usePager = not state.noPager and is_tty

    state.envOK = True
    return state


def pattern_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile the search pattern.

    Args:
        inputstate: Program state with pattern options

    Returns:
        ProgramState with added field:
            - matcher: PatternMatcher for the pattern

    Raises:
        PatternError: If the regular expression is invalid
    """

    state = inputstate.copy()

    state.matcher = PatternMatcher(
        state.pattern,
        regex=state.regex,
        ignore_case=state.caseInsensitive,
        whole_word=state.wholeWord,
    )
    LOG(f"Compiled pattern: {state.matcher.compiled.pattern}", level=2)
    return state


def input_search(inputstate: ProgramState) -> ProgramState:
    """
    Search the input and print results.

    Searches either the single input (file or standard input) or every file
    reported by the git grep pre-filter. An error in any file ends the run.

    Args:
        inputstate: Program state with matcher and searchOptions

    Returns:
        ProgramState with added field:
            - matchFound: True if any line matched

    Raises:
        OSError: On read or write failures
        UnicodeDecodeError: If an input is not valid UTF-8
        PrefilterError: If git grep fails
    """

    state = inputstate.copy()

    LOG("Searching...", level=1)

    try:
        with Output.open(state.usePager) as output:
            printer = Printer(
                output.stream,
                state.searchOptions,
                colorScheme_get(ColorSchemeName(state.colorScheme), state.useColors),
            )
            compositor = Compositor(state.matcher, printer, state.searchOptions)

            if state.useGitGrep:
                command = gitGrepCommand_build(
                    state.pattern,
                    state.input,
                    regex=state.regex,
                    ignore_case=state.caseInsensitive,
                    whole_word=state.wholeWord,
                )
                for path in files_find(command):
                    with input_open(path) as stream:
                        if compositor.search_stream(stream, path):
                            state.matchFound = True
            elif input_isStdin(state.input):
                state.matchFound = compositor.search_stream(input_open(None))
            else:
                with input_open(state.input) as stream:
                    state.matchFound = compositor.search_stream(stream, state.input)
    except BrokenPipeError:
        # Reader went away (e.g. pager quit); output only happens after a match
        LOG("Output closed before search finished", level=1)
        state.matchFound = True
        if not state.usePager:
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Map the search result to the exit status.

    Args:
        inputstate: Program state with matchFound

    Returns:
        ProgramState with added field:
            - exitCode: 0 if matches were found, 1 otherwise
    """
    state: ProgramState = inputstate.copy()
    state.exitCode = 0 if state.matchFound else 1
    LOG(f"Matches found: {state.matchFound}", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - search input and print matches with context.

    Orchestrates the search pipeline:
        1. env_check: Validate options, resolve colors/pager/filenames
        2. pattern_compile: Build the matcher
        3. input_search: Run the compositor over each input
        4. results_report: Compute the exit status

    Args:
        argv: Command line arguments without program name, defaults to
              sys.argv[1:]; default options from OUTLINEGREP_OPTIONS are
              prepended

    Returns:
        Exit status: 0 on match, 1 on no match, 2 on error
    """

    try:
        default_args = appsettings.options_split()
    except OutlineGrepError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    args = default_args + (sys.argv[1:] if argv is None else list(argv))
    options = parser.parse_args(args)

    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    try:
        state = pipeline(state, env_check, pattern_compile, input_search, results_report)
    except (OutlineGrepError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        return 2

    return state.exitCode


if __name__ == "__main__":
    sys.exit(main())
