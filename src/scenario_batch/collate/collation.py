from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple, Optional

import pandas as pd

from scenario_batch.runner.batch import ScenarioRun
from scenario_batch.utils.errors import FieldCollisionError, OutputWriteError

DEFAULT_TAG_FIELD = "scenario"
OUTPUT_FORMATS = {".csv": "csv", ".jsonl": "jsonl"}


class CollationOutcome(NamedTuple):
    frame: pd.DataFrame
    written_path: Optional[Path]


def collate(runs: Iterable[ScenarioRun], *, tag_field: str = DEFAULT_TAG_FIELD) -> pd.DataFrame:
    """Stack per-scenario tables in run order, tagging rows with their scenario."""

    tagged: list[pd.DataFrame] = []
    for name, frame in runs:
        if tag_field in frame.columns:
            raise FieldCollisionError(
                ctx={"field": tag_field, "scenario": name, "columns": list(map(str, frame.columns))},
            )
        block = frame.reset_index(drop=True)
        block.insert(0, tag_field, name)
        tagged.append(block)

    if not tagged:
        return pd.DataFrame(columns=[tag_field])
    return pd.concat(tagged, ignore_index=True)


def _output_format(path: Path) -> str:
    fmt = OUTPUT_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise OutputWriteError(
            ctx={"path": str(path), "error": f"unsupported output format '{path.suffix}'"},
        )
    return fmt


def write_collated(frame: pd.DataFrame, path: Path | str) -> Path:
    """Write ``frame`` to ``path`` via a sibling temp file and an atomic replace."""

    out = Path(path)
    fmt = _output_format(out)
    tmp = out.with_suffix(out.suffix + ".tmp")
    try:
        tmp.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "csv":
            frame.to_csv(tmp, index=False)
        else:
            frame.to_json(tmp, orient="records", lines=True)
        tmp.replace(out)
    except Exception as exc:
        # encoding failures are ValueErrors, not OSErrors; both leave a partial tmp
        tmp.unlink(missing_ok=True)
        raise OutputWriteError(
            ctx={"path": str(out), "error": f"{type(exc).__name__}: {exc}"},
            cause=exc,
        )
    return out


def collate_and_persist(
    runs: Iterable[ScenarioRun],
    *,
    persist: bool,
    output_path: Optional[Path] = None,
    tag_field: str = DEFAULT_TAG_FIELD,
) -> CollationOutcome:
    if persist and output_path is None:
        raise OutputWriteError(ctx={"error": "persist requested without an output path"})
    if persist:
        # reject a bad suffix before doing any work
        _output_format(Path(output_path))
    frame = collate(runs, tag_field=tag_field)
    written = write_collated(frame, output_path) if persist else None
    return CollationOutcome(frame, written)


__all__ = [
    "CollationOutcome",
    "DEFAULT_TAG_FIELD",
    "OUTPUT_FORMATS",
    "collate",
    "collate_and_persist",
    "write_collated",
]
