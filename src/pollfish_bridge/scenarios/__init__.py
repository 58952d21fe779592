"""Scenario framework."""

from .context import ScenarioContext
from .runner import run_all_suites
from .suites import ScenarioSuite

__all__ = ["ScenarioContext", "run_all_suites", "ScenarioSuite"]
