"""Selection from command-line flags."""

from __future__ import annotations

import argparse
from typing import Iterable, Optional, Sequence

from scenario_batch.scenarios.models import ScenarioSet
from scenario_batch.selection.models import Selection
from scenario_batch.utils.errors import (
    MissingValueError,
    UnknownOptionError,
    UnknownScenarioError,
)


class StrictArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises structured errors instead of exiting with status 2."""

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("allow_abbrev", False)
        kwargs.setdefault("exit_on_error", False)
        super().__init__(*args, **kwargs)

    def error(self, message: str):  # type: ignore[override]
        raise UnknownOptionError(ctx={"error": message})


def add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--include",
        action="append",
        default=None,
        metavar="NAME[,NAME...]",
        help="Scenario(s) to run, in order (repeatable or comma-delimited)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress for each scenario",
    )
    parser.add_argument(
        "--write_out",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write the collated table to the output path (default: on)",
    )


def parse_arguments(
    parser: argparse.ArgumentParser, argv: Sequence[str]
) -> argparse.Namespace:
    """Parse ``argv`` rejecting unknown options and options without values."""

    try:
        args, extras = parser.parse_known_args(list(argv))
    except argparse.ArgumentError as exc:
        option = exc.argument_name
        if "expected one argument" in str(exc):
            raise MissingValueError(ctx={"option": option, "error": str(exc)}, cause=exc)
        raise UnknownOptionError(ctx={"option": option, "error": str(exc)}, cause=exc)

    if extras:
        offending = extras[0]
        reason = "unrecognized option" if offending.startswith("-") else "unexpected argument"
        raise UnknownOptionError(ctx={"option": offending, "error": reason})
    return args


def split_names(values: Optional[Iterable[str]]) -> list[str]:
    if values is None:
        raise MissingValueError(ctx={"option": "--include", "error": "required option missing"})
    names: list[str] = []
    for value in values:
        names.extend(part.strip() for part in value.split(",") if part.strip())
    if not names:
        raise MissingValueError(ctx={"option": "--include", "error": "no scenario names given"})
    return names


def validate_names(names: Sequence[str], scenario_set: ScenarioSet) -> None:
    for name in names:
        if name not in scenario_set:
            raise UnknownScenarioError(
                ctx={"scenario": name, "known": list(scenario_set.names())},
            )


def selection_from_args(args: argparse.Namespace, scenario_set: ScenarioSet) -> Selection:
    names = split_names(args.include)
    validate_names(names, scenario_set)
    return Selection(
        scenario_names=tuple(names),
        verbose=bool(args.verbose),
        persist=bool(args.write_out),
    )


def parse_selection(argv: Sequence[str], scenario_set: ScenarioSet) -> Selection:
    """Build a :class:`Selection` from selection flags alone."""

    parser = StrictArgumentParser(description="Select scenarios to run")
    add_selection_arguments(parser)
    return selection_from_args(parse_arguments(parser, argv), scenario_set)


__all__ = [
    "StrictArgumentParser",
    "add_selection_arguments",
    "parse_arguments",
    "parse_selection",
    "selection_from_args",
    "split_names",
    "validate_names",
]
