"""Shared fixtures for end-to-end scenario batch tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

SCENARIOS_YAML = """\
staged_only:
  location_1: false
  location_2: false
  location_3: false
include_everywhere:
  location_1: true
  location_2: true
  location_3: true
"""


def build_input_frame(rows_per_cell: int = 5, seed: int = 7) -> pd.DataFrame:
    rng = np.random.RandomState(seed)
    records = []
    for group, slope in (("cyl4", -0.8), ("cyl6", -0.4), ("cyl8", -0.2)):
        for location in ("location_1", "location_2", "location_3"):
            for staged in (True, False):
                for i in range(rows_per_cell):
                    x = float(i + 1)
                    records.append(
                        {
                            "group": group,
                            "location": location,
                            "staged": staged,
                            "x": x,
                            "y": 30.0 + slope * x + rng.normal(scale=0.5),
                        }
                    )
    return pd.DataFrame.from_records(records)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("SCENARIO_BATCH_CONFIG", raising=False)
    monkeypatch.delenv("SCENARIO_BATCH_OUTPUT_DIR", raising=False)


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    (root / "scenarios.yaml").write_text(SCENARIOS_YAML, encoding="utf-8")
    build_input_frame().to_csv(root / "input.csv", index=False)
    return root
