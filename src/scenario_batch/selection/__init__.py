"""Resolve which scenarios to run, from a menu or from command-line flags."""

from .interactive import prompt_selection
from .models import InvocationMode, Selection, detect_mode
from .scripted import parse_selection

__all__ = [
    "InvocationMode",
    "Selection",
    "detect_mode",
    "parse_selection",
    "prompt_selection",
]
