"""Data structures backing the scenario file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence


@dataclass(frozen=True)
class ScenarioConfig:
    """One named set of boolean toggles."""

    name: str
    toggles: Mapping[str, bool]

    def __post_init__(self) -> None:
        object.__setattr__(self, "toggles", MappingProxyType(dict(self.toggles)))

    def enabled(self, toggle: str) -> bool:
        return bool(self.toggles.get(toggle, False))

    def __getitem__(self, toggle: str) -> bool:
        return self.toggles[toggle]


@dataclass(frozen=True)
class ScenarioSet:
    """All scenarios loaded from one file, in file order.

    Every scenario carries exactly ``toggle_names``; the loader enforces it.
    """

    scenarios: Mapping[str, ScenarioConfig]
    toggle_names: Sequence[str]
    source: Optional[Path] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "scenarios", MappingProxyType(dict(self.scenarios)))
        object.__setattr__(self, "toggle_names", tuple(self.toggle_names))

    def names(self) -> tuple[str, ...]:
        return tuple(self.scenarios)

    def __getitem__(self, name: str) -> ScenarioConfig:
        return self.scenarios[name]

    def __contains__(self, name: object) -> bool:
        return name in self.scenarios

    def __iter__(self) -> Iterator[str]:
        return iter(self.scenarios)

    def __len__(self) -> int:
        return len(self.scenarios)
