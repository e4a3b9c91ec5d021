"""Scenario loader: a two-level mapping of scenario name -> toggle -> bool."""

from __future__ import annotations

import json
from collections import OrderedDict
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from scenario_batch.scenarios.models import ScenarioConfig, ScenarioSet
from scenario_batch.utils.errors import ConfigParseError, ConfigSchemaError

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


def _parse_file(path: Path) -> Any:
    if path.is_dir():
        raise ConfigParseError(ctx={"path": str(path), "error": "path is a directory"})
    if not path.exists():
        raise ConfigParseError(ctx={"path": str(path), "error": "file not found"})

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ConfigParseError(
            ctx={"path": str(path), "error": f"unsupported extension '{suffix}'"},
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(ctx={"path": str(path), "error": "unreadable"}, cause=exc)

    if suffix == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigParseError(
                ctx={"path": str(path), "error": "invalid JSON", "line": exc.lineno},
                cause=exc,
            )

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        ctx: dict[str, Any] = {"path": str(path), "error": "invalid YAML"}
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            ctx["line"] = mark.line + 1
        raise ConfigParseError(ctx=ctx, cause=exc)


def load_scenarios(path: Path | str) -> ScenarioSet:
    """Load a scenario file into a :class:`ScenarioSet`."""

    config_path = Path(path)
    data = _parse_file(config_path)
    return parse_scenarios_mapping(data, source=config_path)


def parse_scenarios_mapping(data: Any, *, source: Optional[Path] = None) -> ScenarioSet:
    """Validate an already-parsed scenario mapping."""

    where = str(source) if source is not None else "<memory>"
    if not isinstance(data, Mapping):
        raise ConfigSchemaError(
            ctx={"path": where, "error": "top-level must be mapping of scenarios"},
        )
    if not data:
        raise ConfigSchemaError(ctx={"path": where, "error": "no scenarios defined"})

    scenarios: OrderedDict[str, ScenarioConfig] = OrderedDict()
    toggle_names: tuple[str, ...] | None = None
    reference: str | None = None

    for name, payload in data.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigSchemaError(
                ctx={"path": where, "scenario": name, "error": "scenario name must be non-empty string"},
            )
        if "," in name:
            # --include splits its value on commas
            raise ConfigSchemaError(
                ctx={"path": where, "scenario": name, "error": "scenario name must not contain ','"},
            )
        toggles = _parse_toggles(name, payload, where=where)

        if toggle_names is None:
            toggle_names = tuple(toggles)
            reference = name
        elif set(toggles) != set(toggle_names):
            raise ConfigSchemaError(
                ctx={
                    "path": where,
                    "scenario": name,
                    "reference": reference,
                    "missing": sorted(set(toggle_names) - set(toggles)),
                    "extra": sorted(set(toggles) - set(toggle_names)),
                    "error": "toggle keys differ between scenarios",
                },
            )
        scenarios[name] = ScenarioConfig(name=name, toggles=toggles)

    return ScenarioSet(scenarios=scenarios, toggle_names=toggle_names or (), source=source)


def _parse_toggles(name: str, payload: Any, *, where: str) -> "OrderedDict[str, bool]":
    if not isinstance(payload, Mapping):
        raise ConfigSchemaError(
            ctx={"path": where, "scenario": name, "error": "scenario must be mapping of toggles"},
        )
    if not payload:
        raise ConfigSchemaError(
            ctx={"path": where, "scenario": name, "error": "scenario has no toggles"},
        )

    toggles: OrderedDict[str, bool] = OrderedDict()
    for toggle, value in payload.items():
        if not isinstance(toggle, str) or not toggle.strip():
            raise ConfigSchemaError(
                ctx={"path": where, "scenario": name, "toggle": toggle, "error": "toggle name must be non-empty string"},
            )
        # bool only; ints and strings like "true" are rejected
        if not isinstance(value, bool):
            raise ConfigSchemaError(
                ctx={
                    "path": where,
                    "scenario": name,
                    "toggle": toggle,
                    "value": value,
                    "error": "toggle value must be boolean",
                },
            )
        toggles[toggle] = value
    return toggles


__all__ = ["load_scenarios", "parse_scenarios_mapping", "SUPPORTED_SUFFIXES"]
