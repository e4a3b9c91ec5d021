"""Built-in scenario transformation: one linear model per group."""

from .group_models import (
    GroupModelSettings,
    fit_group_models,
    make_group_model_transform,
    nest_by_group,
)

__all__ = [
    "GroupModelSettings",
    "fit_group_models",
    "make_group_model_transform",
    "nest_by_group",
]
