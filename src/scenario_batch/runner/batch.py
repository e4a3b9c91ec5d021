from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterator, NamedTuple

import pandas as pd

from scenario_batch.scenarios.models import ScenarioConfig, ScenarioSet
from scenario_batch.selection.models import Selection
from scenario_batch.selection.scripted import validate_names
from scenario_batch.utils.errors import ScenarioExecutionError

logger = logging.getLogger(__name__)

Transform = Callable[[pd.DataFrame, ScenarioConfig], Any]


class ScenarioRun(NamedTuple):
    name: str
    frame: pd.DataFrame


def as_table(result: Any, *, scenario: str) -> pd.DataFrame:
    """Accept a DataFrame or a sequence of same-keyed mappings."""

    if isinstance(result, pd.DataFrame):
        return result
    if isinstance(result, Sequence) and not isinstance(result, (str, bytes)):
        records = list(result)
        if all(isinstance(record, Mapping) for record in records):
            # same key set in any order; column order follows the first record
            keys = {frozenset(record.keys()) for record in records}
            if len(keys) <= 1:
                columns = list(records[0].keys()) if records else None
                return pd.DataFrame.from_records(records, columns=columns)
            raise ScenarioExecutionError(
                ctx={
                    "scenario": scenario,
                    "reason": "result_not_uniform",
                    "shapes": sorted(sorted(map(str, shape)) for shape in keys),
                },
            )
    raise ScenarioExecutionError(
        ctx={"scenario": scenario, "reason": "result_not_tabular", "type": type(result).__name__},
    )


def iter_batch(
    data: pd.DataFrame,
    scenario_set: ScenarioSet,
    selection: Selection,
    transform: Transform,
    *,
    verbose: bool = False,
) -> Iterator[ScenarioRun]:
    # every name is checked before the first scenario runs
    validate_names(selection.scenario_names, scenario_set)
    level = logging.INFO if verbose else logging.DEBUG
    total = len(selection.scenario_names)

    for idx, name in enumerate(selection.scenario_names, start=1):
        logger.log(level, "running scenario %s (%d/%d)", name, idx, total)
        try:
            result = transform(data, scenario_set[name])
        except Exception as exc:
            raise ScenarioExecutionError(
                ctx={"scenario": name, "reason": "transform_failed"},
                cause=exc,
            )
        frame = as_table(result, scenario=name)
        logger.log(level, "scenario %s produced %d rows", name, len(frame))
        yield ScenarioRun(name, frame)


def run_batch(
    data: pd.DataFrame,
    scenario_set: ScenarioSet,
    selection: Selection,
    transform: Transform,
    *,
    verbose: bool = False,
) -> list[ScenarioRun]:
    """Run every selected scenario in order; the first failure aborts the batch."""

    return list(iter_batch(data, scenario_set, selection, transform, verbose=verbose))


__all__ = ["ScenarioRun", "Transform", "as_table", "iter_batch", "run_batch"]
