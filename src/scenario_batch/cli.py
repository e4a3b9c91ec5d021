"""Command-line entry point for running scenario batches."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from pydantic import ValidationError

from scenario_batch.analysis.group_models import GroupModelSettings, make_group_model_transform
from scenario_batch.collate import collate_and_persist
from scenario_batch.config.paths import Paths
from scenario_batch.config.settings import RunSettings
from scenario_batch.runner import Transform, run_batch
from scenario_batch.scenarios import load_scenarios
from scenario_batch.selection import InvocationMode, detect_mode, prompt_selection
from scenario_batch.selection.scripted import (
    StrictArgumentParser,
    add_selection_arguments,
    parse_arguments,
    selection_from_args,
)
from scenario_batch.utils.csv_reading import read_csv_with_context
from scenario_batch.utils.errors import BatchError, ConfigSchemaError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = StrictArgumentParser(
        prog="scenario-batch",
        description=(
            "Run an analysis once per named scenario and collate the results. "
            "Started without arguments at a terminal, it asks which scenario to run."
        ),
    )
    add_selection_arguments(parser)
    parser.add_argument(
        "--data-root",
        default="data",
        help="Directory holding scenarios.yaml, input.csv and output/ (default: ./data)",
    )
    parser.add_argument("--config", type=Path, help="Scenario file (yaml or json)")
    parser.add_argument("--data", type=Path, help="Input table (csv)")
    parser.add_argument("--out", type=Path, help="Output path (csv or jsonl)")
    parser.add_argument("--tag-field", help="Column holding the scenario name (default: scenario)")
    parser.add_argument("--group-column", help="Column the rows are grouped by (default: group)")
    parser.add_argument("--formula", help="Model formula fitted per group (default: 'y ~ x')")
    return parser


def _settings_from_args(args: argparse.Namespace) -> RunSettings:
    model_overrides = {
        key: value
        for key, value in (("group_column", args.group_column), ("formula", args.formula))
        if value is not None
    }
    try:
        return RunSettings.from_paths(
            Paths.from_str(args.data_root),
            config_path=args.config,
            data_path=args.data,
            output_path=args.out,
            tag_field=args.tag_field,
            model=GroupModelSettings(**model_overrides) if model_overrides else None,
        )
    except ValidationError as exc:
        raise ConfigSchemaError(
            ctx={"error": "invalid run settings", "fields": [".".join(map(str, e["loc"])) for e in exc.errors()]},
            cause=exc,
        )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def run(
    argv: Iterable[str] | None = None,
    *,
    stdin: Optional[TextIO] = None,
    transform: Optional[Transform] = None,
) -> int:
    """Run one batch; structured errors propagate to the caller."""

    arguments = list(sys.argv[1:] if argv is None else argv)
    mode = detect_mode(arguments, sys.stdin if stdin is None else stdin)

    parser = _build_parser()
    args = parse_arguments(parser, arguments)
    settings = _settings_from_args(args)

    scenario_set = load_scenarios(settings.config_path)
    if mode is InvocationMode.INTERACTIVE:
        selection = prompt_selection(scenario_set)
    else:
        selection = selection_from_args(args, scenario_set)
    _configure_logging(selection.verbose)

    data = read_csv_with_context(settings.data_path)
    runs = run_batch(
        data,
        scenario_set,
        selection,
        transform or make_group_model_transform(settings.model),
        verbose=selection.verbose,
    )
    outcome = collate_and_persist(
        runs,
        persist=selection.persist,
        output_path=settings.output_path,
        tag_field=settings.tag_field,
    )

    summary = f"{len(outcome.frame)} rows from {len(runs)} scenario(s)"
    if outcome.written_path is not None:
        summary += f" written to {outcome.written_path}"
    print(summary)
    return 0


def main(
    argv: Iterable[str] | None = None,
    *,
    stdin: Optional[TextIO] = None,
    transform: Optional[Transform] = None,
) -> int:
    try:
        return run(argv, stdin=stdin, transform=transform)
    except BatchError as exc:
        logger.debug("batch failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        for line in exc.ctx.get("excerpt", ()):
            print(f"  {line}", file=sys.stderr)
        return exc.exit_code


def entrypoint() -> None:  # pragma: no cover - console entry
    raise SystemExit(main())
