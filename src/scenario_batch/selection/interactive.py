"""Selection from a numbered console menu."""

from __future__ import annotations

from typing import Callable, Optional

from scenario_batch.scenarios.models import ScenarioSet
from scenario_batch.selection.models import Selection
from scenario_batch.utils.errors import MissingValueError

YES = {"y", "yes"}
NO = {"", "n", "no"}

# Interactive runs always save their output.
INTERACTIVE_PERSIST = True


def _prompt(prompt: str) -> str:
    return input(prompt).strip()


def _ask(prompt: str, ask: Optional[Callable[[str], str]]) -> str:
    reader = ask or _prompt
    try:
        return reader(prompt).strip()
    except EOFError as exc:
        raise MissingValueError(ctx={"prompt": prompt.strip(), "error": "input closed"}, cause=exc)


def choose_scenario(
    scenario_set: ScenarioSet, *, ask: Optional[Callable[[str], str]] = None
) -> str:
    """Show the menu and return one scenario name; ``0`` cancels."""

    names = scenario_set.names()
    print("Available scenarios:")
    for idx, name in enumerate(names, start=1):
        print(f"  {idx}. {name}")

    while True:
        answer = _ask(f"Select scenario [1-{len(names)}, 0 to cancel]: ", ask)
        if answer == "0":
            raise MissingValueError(ctx={"prompt": "scenario", "error": "selection cancelled"})
        if answer.isdigit() and 1 <= int(answer) <= len(names):
            return names[int(answer) - 1]
        if answer in scenario_set:
            return answer
        print(f"Invalid choice {answer!r}; enter a number between 1 and {len(names)}.")


def confirm(question: str, *, ask: Optional[Callable[[str], str]] = None) -> bool:
    while True:
        answer = _ask(f"{question} [y/N]: ", ask).lower()
        if answer in YES:
            return True
        if answer in NO:
            return False
        print("Please answer 'y' or 'n'.")


def prompt_selection(
    scenario_set: ScenarioSet, *, ask: Optional[Callable[[str], str]] = None
) -> Selection:
    name = choose_scenario(scenario_set, ask=ask)
    verbose = confirm("Verbose output?", ask=ask)
    return Selection(scenario_names=(name,), verbose=verbose, persist=INTERACTIVE_PERSIST)


__all__ = ["choose_scenario", "confirm", "prompt_selection", "INTERACTIVE_PERSIST"]
