"""
Models package for outlinegrep

Contains data structures and type definitions for the search pipeline.
"""

from .state import ProgramState, pipeline
from .line import (
    Line,
    Action,
    DirectiveKind,
    OutlineEntry,
    DirectiveEntry,
    WindowEntry,
    indentation_calculate,
    startsWith_word,
)
from .options import (
    DirectiveMode,
    ColorMode,
    ColorSchemeName,
    FilenameMode,
    SearchOptions,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "Line",
    "Action",
    "DirectiveKind",
    "OutlineEntry",
    "DirectiveEntry",
    "WindowEntry",
    "indentation_calculate",
    "startsWith_word",
    "DirectiveMode",
    "ColorMode",
    "ColorSchemeName",
    "FilenameMode",
    "SearchOptions",
]
