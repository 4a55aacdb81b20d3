"""
outlinegrep - Outline-aware text search

Prints matching lines together with the structural context needed to read them.
"""

__version__ = "1.0.0"

from .compositor import Compositor, contexts_merge
from .matcher import PatternMatcher
from .printer import Printer, ColorScheme, colorScheme_get
from .errors import OutlineGrepError
from .log import LOG, state_connectToLogger

__all__ = [
    "Compositor",
    "contexts_merge",
    "PatternMatcher",
    "Printer",
    "ColorScheme",
    "colorScheme_get",
    "OutlineGrepError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
