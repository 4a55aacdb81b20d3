"""
outlinegrep - Outline-aware text search

A grep that shows each matching line together with its indentation
ancestors, sibling branches and preprocessor scope.
"""

__version__ = "1.0.0"

from .lib import Compositor, PatternMatcher, Printer, OutlineGrepError, LOG, state_connectToLogger

__all__ = [
    "Compositor",
    "PatternMatcher",
    "Printer",
    "OutlineGrepError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
