"""Sequential, fail-fast execution of the selected scenarios."""

from .batch import ScenarioRun, Transform, iter_batch, run_batch

__all__ = ["ScenarioRun", "Transform", "iter_batch", "run_batch"]
