from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, TextIO

from scenario_batch.utils.errors import MissingValueError


class InvocationMode(Enum):
    """How the process was started; decided once and passed down."""

    INTERACTIVE = "interactive"
    SCRIPTED = "scripted"


def detect_mode(argv: Sequence[str], stdin: Optional[TextIO]) -> InvocationMode:
    if argv:
        return InvocationMode.SCRIPTED
    isatty = getattr(stdin, "isatty", None)
    if callable(isatty) and isatty():
        return InvocationMode.INTERACTIVE
    return InvocationMode.SCRIPTED


@dataclass(frozen=True)
class Selection:
    """Scenarios to run, in order, plus the verbosity and persist switches."""

    scenario_names: tuple[str, ...]
    verbose: bool = False
    persist: bool = True

    def __post_init__(self) -> None:
        names = tuple(self.scenario_names)
        if not names:
            raise MissingValueError(ctx={"option": "scenario_names", "error": "selection is empty"})
        object.__setattr__(self, "scenario_names", names)


__all__ = ["InvocationMode", "Selection", "detect_mode"]
