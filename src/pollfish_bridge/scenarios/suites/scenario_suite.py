"""Scenario suite loaded from SCENARIOS.yaml."""

import time
from typing import Any, Dict

from ...scenario import ScenarioExecutor
from ...types import ScenarioResult, ScenarioSuiteResult
from ..context import ScenarioContext


class ScenarioSuite:
    """Runs every scenario of one suite, category by category."""

    def __init__(self, suite_name: str, executor: ScenarioExecutor):
        """
        Initialize the suite.

        Args:
            suite_name: Name of the suite in SCENARIOS.yaml (e.g., 'registration')
            executor: Scenario executor instance
        """
        self.name = suite_name
        self.executor = executor
        self.suite_def = executor.get_suites().get(suite_name, {})

    async def run(self, ctx: ScenarioContext) -> ScenarioSuiteResult:
        """Run all scenarios in this suite."""
        results = []

        for category_name, category_def in self.suite_def.get("categories", {}).items():
            for scenario_def in category_def.get("scenarios", []):
                scenario_name = f"{category_name}.{scenario_def['name']}"
                result = await self._run_scenario(scenario_name, scenario_def, ctx)
                results.append(result)

        return ScenarioSuiteResult(name=self.name, results=results)

    async def _run_scenario(self, scenario_name: str, scenario_def: Dict[str, Any], ctx: ScenarioContext) -> ScenarioResult:
        start_ms = int(time.time() * 1000)

        try:
            await self.executor.run_scenario(scenario_def, ctx)
            duration_ms = int(time.time() * 1000) - start_ms
            return ScenarioResult(name=scenario_name, passed=True, duration_ms=duration_ms)
        except Exception as e:
            duration_ms = int(time.time() * 1000) - start_ms
            return ScenarioResult(
                name=scenario_name,
                passed=False,
                duration_ms=duration_ms,
                message=str(e),
            )
