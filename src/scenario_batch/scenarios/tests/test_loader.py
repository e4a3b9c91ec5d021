from __future__ import annotations

import json
from pathlib import Path

import pytest

from scenario_batch.scenarios.loader import load_scenarios, parse_scenarios_mapping
from scenario_batch.utils.errors import ConfigParseError, ConfigSchemaError

EXAMPLE_YAML = """\
staged_only:
  location_1: false
  location_2: false
  location_3: false
include_everywhere:
  location_1: true
  location_2: true
  location_3: true
"""


def write_yaml(tmp_path: Path, text: str, name: str = "scenarios.yaml") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def write_json(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "scenarios.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_scenarios_round_trip(tmp_path: Path) -> None:
    scenario_set = load_scenarios(write_yaml(tmp_path, EXAMPLE_YAML))

    assert scenario_set.names() == ("staged_only", "include_everywhere")
    assert scenario_set.toggle_names == ("location_1", "location_2", "location_3")
    assert dict(scenario_set["staged_only"].toggles) == {
        "location_1": False,
        "location_2": False,
        "location_3": False,
    }
    assert dict(scenario_set["include_everywhere"].toggles) == {
        "location_1": True,
        "location_2": True,
        "location_3": True,
    }
    assert scenario_set.source == tmp_path / "scenarios.yaml"
    assert len(scenario_set) == 2
    assert "staged_only" in scenario_set


def test_load_scenarios_json(tmp_path: Path) -> None:
    path = write_json(tmp_path, {"a": {"t1": True, "t2": False}, "b": {"t2": True, "t1": True}})

    scenario_set = load_scenarios(path)

    assert list(scenario_set) == ["a", "b"]
    assert scenario_set["b"]["t2"] is True
    assert scenario_set["a"].enabled("t2") is False
    assert scenario_set["a"].enabled("not-a-toggle") is False


def test_loaded_toggles_are_read_only(tmp_path: Path) -> None:
    scenario_set = load_scenarios(write_yaml(tmp_path, EXAMPLE_YAML))

    with pytest.raises(TypeError):
        scenario_set["staged_only"].toggles["location_1"] = True  # type: ignore[index]
    with pytest.raises(TypeError):
        scenario_set.scenarios["new"] = scenario_set["staged_only"]  # type: ignore[index]


def test_missing_file_is_parse_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigParseError) as exc:
        load_scenarios(tmp_path / "missing.yaml")
    assert exc.value.ctx["path"] == str(tmp_path / "missing.yaml")


def test_directory_is_parse_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigParseError) as exc:
        load_scenarios(tmp_path)
    assert "directory" in exc.value.ctx["error"]


def test_invalid_yaml_is_parse_error(tmp_path: Path) -> None:
    path = write_yaml(tmp_path, "staged_only:\n  location_1: [unclosed\n")

    with pytest.raises(ConfigParseError) as exc:
        load_scenarios(path)
    assert exc.value.ctx["error"] == "invalid YAML"
    assert exc.value.__cause__ is not None


def test_invalid_json_is_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "scenarios.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        load_scenarios(path)


def test_unsupported_suffix_is_parse_error(tmp_path: Path) -> None:
    path = write_yaml(tmp_path, EXAMPLE_YAML, name="scenarios.toml")

    with pytest.raises(ConfigParseError) as exc:
        load_scenarios(path)
    assert "unsupported" in exc.value.ctx["error"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "- staged_only\n- include_everywhere\n",
        "staged_only: true\n",
        "staged_only: {}\n",
    ],
)
def test_wrong_shape_is_schema_error(tmp_path: Path, text: str) -> None:
    with pytest.raises(ConfigSchemaError):
        load_scenarios(write_yaml(tmp_path, text))


@pytest.mark.parametrize("value", ["'true'", "1", "null"])
def test_non_boolean_toggle_is_schema_error(tmp_path: Path, value: str) -> None:
    path = write_yaml(tmp_path, f"only:\n  location_1: {value}\n")

    with pytest.raises(ConfigSchemaError) as exc:
        load_scenarios(path)
    assert exc.value.ctx["toggle"] == "location_1"


def test_mismatched_toggles_rejected(tmp_path: Path) -> None:
    path = write_yaml(
        tmp_path,
        "a:\n  location_1: true\n  location_2: true\n"
        "b:\n  location_1: false\n  location_3: false\n",
    )

    with pytest.raises(ConfigSchemaError) as exc:
        load_scenarios(path)
    ctx = exc.value.ctx
    assert ctx["scenario"] == "b"
    assert ctx["reference"] == "a"
    assert ctx["missing"] == ["location_2"]
    assert ctx["extra"] == ["location_3"]


def test_toggle_order_may_differ(tmp_path: Path) -> None:
    scenario_set = parse_scenarios_mapping(
        {"a": {"x": True, "y": False}, "b": {"y": True, "x": False}},
    )
    assert scenario_set.toggle_names == ("x", "y")
    assert scenario_set.source is None


def test_non_string_scenario_name_rejected() -> None:
    with pytest.raises(ConfigSchemaError):
        parse_scenarios_mapping({1: {"x": True}})


def test_comma_in_scenario_name_rejected(tmp_path: Path) -> None:
    path = tmp_path / "scenarios.yaml"
    path.write_text('"north,south":\n  x: true\n', encoding="utf-8")

    with pytest.raises(ConfigSchemaError) as exc:
        load_scenarios(path)

    assert exc.value.ctx["scenario"] == "north,south"
    assert "','" in exc.value.ctx["error"]
