"""Scenario suites."""

from .scenario_suite import ScenarioSuite

__all__ = ["ScenarioSuite"]
