"""Per-group linear models over the rows a scenario's toggles let through.

Rows flagged as staged are always used. Every other row is used only when the
scenario enables the toggle named after the row's location. The surviving rows
are nested by group (one frame per group in a list-column), one OLS model is
fitted per group and the coefficients come back as one tidy table.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from pydantic import BaseModel, ConfigDict, Field

from scenario_batch.scenarios.models import ScenarioConfig

TIDY_COLUMNS = ["term", "estimate", "std_error", "p_value", "n_obs", "r_squared"]


class GroupModelSettings(BaseModel):
    group_column: str = "group"
    location_column: str = "location"
    staged_column: str = "staged"
    formula: str = "y ~ x"
    min_group_rows: int = Field(3, ge=2)

    model_config = ConfigDict(frozen=True)


def _require_columns(df: pd.DataFrame, columns: list[str]) -> None:
    missing = [column for column in columns if column not in df.columns]
    if missing:
        raise ValueError(f"input data is missing required columns: {missing}")


def select_rows(
    data: pd.DataFrame, config: ScenarioConfig, settings: GroupModelSettings
) -> pd.DataFrame:
    _require_columns(data, [settings.location_column, settings.staged_column])
    staged = data[settings.staged_column].fillna(False).astype(bool)
    enabled = data[settings.location_column].astype(str).map(config.enabled).astype(bool)
    return data.loc[staged | enabled]


def nest_by_group(data: pd.DataFrame, group_column: str) -> pd.DataFrame:
    """One row per group with that group's rows held in a ``data`` column."""

    _require_columns(data, [group_column])
    groups = list(data.groupby(group_column, sort=True))
    # object array so pandas keeps each frame as a single cell
    frames = np.empty(len(groups), dtype=object)
    for idx, (_, frame) in enumerate(groups):
        frames[idx] = frame.reset_index(drop=True)

    nested = pd.DataFrame(
        {
            group_column: [key for key, _ in groups],
            "n_obs": [len(frame) for _, frame in groups],
        }
    )
    nested["data"] = pd.Series(frames, index=nested.index, dtype=object)
    return nested[[group_column, "data", "n_obs"]]


def tidy_model(fitted) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "term": list(fitted.params.index),
            "estimate": fitted.params.to_numpy(dtype=float),
            "std_error": fitted.bse.to_numpy(dtype=float),
            "p_value": fitted.pvalues.to_numpy(dtype=float),
            "n_obs": int(fitted.nobs),
            "r_squared": float(fitted.rsquared),
        }
    )


def fit_group_models(
    data: pd.DataFrame,
    config: ScenarioConfig,
    *,
    settings: Optional[GroupModelSettings] = None,
) -> pd.DataFrame:
    settings = settings or GroupModelSettings()
    group_column = settings.group_column

    rows = select_rows(data, config, settings)
    if rows.empty:
        raise ValueError(f"scenario '{config.name}' leaves no rows to model")

    nested = nest_by_group(rows, group_column)
    small = nested.loc[nested["n_obs"] < settings.min_group_rows, group_column].tolist()
    if small:
        raise ValueError(
            f"groups {small} have fewer than {settings.min_group_rows} rows in scenario '{config.name}'"
        )

    nested["model"] = nested["data"].map(lambda frame: smf.ols(settings.formula, data=frame).fit())

    tidy = [
        tidy_model(model).assign(**{group_column: key})
        for key, model in zip(nested[group_column], nested["model"])
    ]
    return pd.concat(tidy, ignore_index=True)[[group_column, *TIDY_COLUMNS]]


def make_group_model_transform(
    settings: Optional[GroupModelSettings] = None,
) -> Callable[[pd.DataFrame, ScenarioConfig], pd.DataFrame]:
    return partial(fit_group_models, settings=settings or GroupModelSettings())


__all__ = [
    "GroupModelSettings",
    "TIDY_COLUMNS",
    "fit_group_models",
    "make_group_model_transform",
    "nest_by_group",
    "select_rows",
    "tidy_model",
]
