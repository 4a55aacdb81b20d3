"""
Diagnostics on stderr

LOG() writes through loguru when the verbosity of the running search allows
it. The command line connects its ProgramState once; library code then logs
without passing the state around. Results go to stdout or the pager, so
diagnostics never end up between printed lines.

    -v    stage progress
    -vv   per-file details, pre-filter and pager command lines,
          unbalanced directives
    -vvv  error tracebacks
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the running search, None outside main()
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module}.{function}</cyan>:<cyan>{line}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """Make state.verbosity the threshold for LOG() calls"""
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log a diagnostic if the connected verbosity is at least level

    Nothing is logged before state_connectToLogger() runs, so library use
    outside the command line stays silent.

    Args:
        message: Diagnostic text
        level: Verbosity required, 1 to 3
        **kwargs: Passed to loguru for message formatting
    """
    state = _program_state.get()
    if state is None or getattr(state, 'verbosity', 0) < level:
        return
    # Report the caller, not this wrapper
    logger.opt(depth=1).debug(message, **kwargs)
