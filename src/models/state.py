"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing command line stages.
"""

from argparse import Namespace
from typing import Optional, Type, TypeVar, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

from .options import SearchOptions

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from ..lib.matcher import PatternMatcher


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the search pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the search progresses.

    Pipeline stages and their state additions:
        - Initial: command line options (pattern, input, flags, verbosity)
        - env_check: searchOptions, useColors, usePager, envOK
        - pattern_compile: matcher
        - input_search: matchFound
        - results_report: exitCode

    Attributes:
        pattern: Pattern to search for
        input: Input path, "-" for standard input
        regex: Treat pattern as a regular expression
        caseInsensitive: Case-insensitive matching
        wholeWord: Match whole words only
        children: Print descendants of every match
        beforeContext: Leading window lines (-B)
        afterContext: Trailing window lines (-A)
        context: Leading and trailing window lines (-C)
        color: Color mode name (always/auto/never)
        colorScheme: Color scheme name (grey/colored)
        noPager: Never start a pager
        useGitGrep: Pre-filter files with git grep
        noBreaks: Do not reproduce blank-line breaks
        ellipsis: Mark elided lines
        printFilename: Filename mode name, None when not given
        noSmartBranches: Disable sibling branch retention
        preprocessor: Directive mode name (context/ignore/preserve)
        verbosity: Logging verbosity level (0-3)
        envOK: Environment validation passed
        searchOptions: Options handed to the compositor and printer
        useColors: Resolved color decision
        usePager: Resolved pager decision
        matcher: Compiled pattern matcher
        matchFound: At least one line matched
        exitCode: Process exit status
    """

    # CLI arguments
    pattern: str = field(default="")
    input: str = field(default="-")
    regex: bool = field(default=False)
    caseInsensitive: bool = field(default=False)
    wholeWord: bool = field(default=False)
    children: bool = field(default=False)
    beforeContext: Optional[int] = field(default=None)
    afterContext: Optional[int] = field(default=None)
    context: Optional[int] = field(default=None)
    color: str = field(default="auto")
    colorScheme: str = field(default="grey")
    noPager: bool = field(default=False)
    useGitGrep: bool = field(default=False)
    noBreaks: bool = field(default=False)
    ellipsis: bool = field(default=False)
    printFilename: Optional[str] = field(default=None)
    noSmartBranches: bool = field(default=False)
    preprocessor: str = field(default="context")
    verbosity: int = field(default=0)

    # Pipeline state
    envOK: bool = field(default=False)
    searchOptions: SearchOptions = field(default_factory=SearchOptions)
    useColors: bool = field(default=False)
    usePager: bool = field(default=False)
    matcher: Optional["PatternMatcher"] = field(default=None)
    matchFound: bool = field(default=False)
    exitCode: int = field(default=1)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        # Get the dictionary of all attributes from the Namespace
        options_dict = vars(options)

        # Get the set of valid field names for ProgramState
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Filter options_dict to only include fields that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            pattern_compile,
            input_search,
            results_report
        )

    This is equivalent to:
        results_report(input_search(pattern_compile(env_check(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
