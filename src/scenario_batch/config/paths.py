from __future__ import annotations

"""Data-root aware path helpers for scenario files, input tables and outputs."""

from dataclasses import dataclass
from pathlib import Path
import os

from ..utils.errors import ConfigParseError

# Canonical filenames under the data root (single source of truth)
SCENARIOS_FILENAME = "scenarios.yaml"
INPUT_FILENAME = "input.csv"
COLLATED_FILENAME = "collated.csv"

# Environment overrides
CONFIG_ENV_VAR = "SCENARIO_BATCH_CONFIG"
OUTPUT_DIR_ENV_VAR = "SCENARIO_BATCH_OUTPUT_DIR"


@dataclass(frozen=True)
class Paths:
    """Project path helper bound to a data root."""

    data_root: Path

    def __post_init__(self):
        if self.data_root is None or str(self.data_root).strip() == "":
            raise ConfigParseError(ctx={"reason": "paths_missing_data_root"})
        object.__setattr__(self, "data_root", Path(self.data_root))

    # --- Inputs ---
    @property
    def scenarios_path(self) -> Path:
        env = os.environ.get(CONFIG_ENV_VAR)
        return Path(env) if env else (self.data_root / SCENARIOS_FILENAME)

    @property
    def input_path(self) -> Path:
        return self.data_root / INPUT_FILENAME

    # --- Outputs ---
    @property
    def output_dir(self) -> Path:
        env = os.environ.get(OUTPUT_DIR_ENV_VAR)
        return Path(env) if env else (self.data_root / "output")

    def collated_path(self, filename: str = COLLATED_FILENAME) -> Path:
        if not filename or str(filename).strip() == "":
            raise ConfigParseError(ctx={"reason": "paths_missing_output_name"})
        return self.output_dir / str(filename)

    # --- Constructors ---
    @classmethod
    def from_str(cls, data_root: str | os.PathLike[str]) -> "Paths":
        if data_root is None or str(data_root).strip() == "":
            raise ConfigParseError(ctx={"reason": "paths_missing_data_root"})
        return cls(Path(data_root))


__all__ = [
    "Paths",
    "SCENARIOS_FILENAME",
    "INPUT_FILENAME",
    "COLLATED_FILENAME",
    "CONFIG_ENV_VAR",
    "OUTPUT_DIR_ENV_VAR",
]
