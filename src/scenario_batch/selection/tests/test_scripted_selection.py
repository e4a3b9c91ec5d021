from __future__ import annotations

import pytest

from scenario_batch.scenarios.loader import parse_scenarios_mapping
from scenario_batch.selection.scripted import parse_selection
from scenario_batch.utils.errors import (
    MissingValueError,
    UnknownOptionError,
    UnknownScenarioError,
)

pytestmark = [pytest.mark.unit]


@pytest.fixture
def scenario_set():
    return parse_scenarios_mapping(
        {
            "staged_only": {"location_1": False, "location_2": False},
            "include_everywhere": {"location_1": True, "location_2": True},
            "north_only": {"location_1": True, "location_2": False},
        }
    )


def test_single_include_defaults(scenario_set) -> None:
    selection = parse_selection(["--include", "staged_only"], scenario_set)

    assert selection.scenario_names == ("staged_only",)
    assert selection.verbose is False
    assert selection.persist is True


def test_repeatable_and_comma_delimited_keep_order(scenario_set) -> None:
    selection = parse_selection(
        ["--include", "north_only,staged_only", "--include", "include_everywhere"],
        scenario_set,
    )

    assert selection.scenario_names == ("north_only", "staged_only", "include_everywhere")


def test_duplicates_are_kept(scenario_set) -> None:
    selection = parse_selection(["--include", "staged_only, staged_only"], scenario_set)
    assert selection.scenario_names == ("staged_only", "staged_only")


def test_flags(scenario_set) -> None:
    selection = parse_selection(
        ["--include=staged_only", "-v", "--write_out"], scenario_set
    )
    assert selection.verbose is True
    assert selection.persist is True

    selection = parse_selection(
        ["--verbose", "--no-write_out", "--include", "staged_only"], scenario_set
    )
    assert selection.verbose is True
    assert selection.persist is False


def test_unknown_scenario(scenario_set) -> None:
    with pytest.raises(UnknownScenarioError) as exc:
        parse_selection(["--include", "staged_only,nowhere"], scenario_set)

    assert exc.value.ctx["scenario"] == "nowhere"
    assert "staged_only" in exc.value.ctx["known"]
    assert exc.value.exit_code == 2


@pytest.mark.parametrize(
    "argv, option",
    [
        (["--include", "staged_only", "--bogus"], "--bogus"),
        (["--include", "staged_only", "--verb"], "--verb"),
        (["--include", "staged_only", "stray"], "stray"),
    ],
)
def test_unknown_option(scenario_set, argv, option) -> None:
    with pytest.raises(UnknownOptionError) as exc:
        parse_selection(argv, scenario_set)
    assert exc.value.ctx["option"] == option


@pytest.mark.parametrize(
    "argv",
    [
        ["--include"],
        ["--include", "--verbose"],
        ["--include="],
        ["--include", " , "],
        ["--verbose"],
    ],
)
def test_missing_include_value(scenario_set, argv) -> None:
    with pytest.raises(MissingValueError) as exc:
        parse_selection(argv, scenario_set)
    assert exc.value.ctx["option"] == "--include"


def test_help_exits_zero(scenario_set, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        parse_selection(["--help"], scenario_set)

    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "--include" in out
    assert "--write_out" in out
