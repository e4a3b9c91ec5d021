from __future__ import annotations

"""Validated run settings assembled from the data root and CLI overrides."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from scenario_batch.analysis.group_models import GroupModelSettings
from scenario_batch.config.paths import Paths


class RunSettings(BaseModel):
    """Everything one batch run needs besides the user's selection."""

    config_path: Path
    data_path: Path
    output_path: Path
    tag_field: str = Field("scenario", min_length=1)
    model: GroupModelSettings = Field(default_factory=GroupModelSettings)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_paths(
        cls,
        paths: Paths,
        *,
        config_path: Optional[Path] = None,
        data_path: Optional[Path] = None,
        output_path: Optional[Path] = None,
        tag_field: Optional[str] = None,
        model: Optional[GroupModelSettings] = None,
    ) -> "RunSettings":
        values: dict[str, object] = {
            "config_path": config_path or paths.scenarios_path,
            "data_path": data_path or paths.input_path,
            "output_path": output_path or paths.collated_path(),
        }
        if tag_field is not None:
            values["tag_field"] = tag_field
        if model is not None:
            values["model"] = model
        return cls(**values)


__all__ = ["RunSettings"]
