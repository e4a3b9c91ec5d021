from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Err(Enum):
    CONFIG_PARSE = auto()
    CONFIG_SCHEMA = auto()
    UNKNOWN_SCENARIO = auto()
    UNKNOWN_OPTION = auto()
    MISSING_VALUE = auto()
    SCENARIO_EXECUTION = auto()
    FIELD_COLLISION = auto()
    OUTPUT_WRITE = auto()


# Process exit status per error code. 0 is success, 1 is left to the interpreter.
EXIT_CODES: dict[Err, int] = {
    Err.UNKNOWN_OPTION: 2,
    Err.MISSING_VALUE: 2,
    Err.UNKNOWN_SCENARIO: 2,
    Err.CONFIG_PARSE: 3,
    Err.CONFIG_SCHEMA: 3,
    Err.SCENARIO_EXECUTION: 4,
    Err.FIELD_COLLISION: 4,
    Err.OUTPUT_WRITE: 5,
}

# Context keys rendered by the CLI on their own lines, not in the one-line message.
DETAIL_KEYS = frozenset({"excerpt"})


@dataclass(eq=False)
class BatchError(Exception):
    code: Err
    ctx: dict[str, Any] | None = None
    cause: Exception | None = None

    def __post_init__(self) -> None:
        if self.ctx is None:
            self.ctx = {}
        if self.cause is not None:
            self.__cause__ = self.cause
        super().__init__(self.code.name)

    @property
    def exit_code(self) -> int:
        return EXIT_CODES.get(self.code, 1)

    def __str__(self) -> str:
        parts = [self.code.name]
        if self.ctx:
            shown = {k: v for k, v in self.ctx.items() if k not in DETAIL_KEYS}
            if shown:
                parts.append(", ".join(f"{k}={v!r}" for k, v in shown.items()))
        if self.cause is not None:
            parts.append(f"caused by {type(self.cause).__name__}: {self.cause}")
        return ": ".join(parts)


@dataclass(eq=False)
class ConfigParseError(BatchError):
    code: Err = Err.CONFIG_PARSE


@dataclass(eq=False)
class ConfigSchemaError(BatchError):
    code: Err = Err.CONFIG_SCHEMA


@dataclass(eq=False)
class UnknownScenarioError(BatchError):
    code: Err = Err.UNKNOWN_SCENARIO


@dataclass(eq=False)
class UnknownOptionError(BatchError):
    code: Err = Err.UNKNOWN_OPTION


@dataclass(eq=False)
class MissingValueError(BatchError):
    code: Err = Err.MISSING_VALUE


@dataclass(eq=False)
class ScenarioExecutionError(BatchError):
    code: Err = Err.SCENARIO_EXECUTION


@dataclass(eq=False)
class FieldCollisionError(BatchError):
    code: Err = Err.FIELD_COLLISION


@dataclass(eq=False)
class OutputWriteError(BatchError):
    code: Err = Err.OUTPUT_WRITE


__all__ = [
    "Err",
    "EXIT_CODES",
    "DETAIL_KEYS",
    "BatchError",
    "ConfigParseError",
    "ConfigSchemaError",
    "UnknownScenarioError",
    "UnknownOptionError",
    "MissingValueError",
    "ScenarioExecutionError",
    "FieldCollisionError",
    "OutputWriteError",
]
