"""Scenario file loading and the immutable scenario set."""

from .loader import load_scenarios, parse_scenarios_mapping
from .models import ScenarioConfig, ScenarioSet

__all__ = [
    "ScenarioConfig",
    "ScenarioSet",
    "load_scenarios",
    "parse_scenarios_mapping",
]
