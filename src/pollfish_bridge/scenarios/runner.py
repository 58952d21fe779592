"""Scenario runner."""

import logging
import time
from typing import List, Optional

from ..scenario import ScenarioExecutor
from ..types import ScenarioSummary
from .context import ScenarioContext
from .suites import ScenarioSuite

logger = logging.getLogger(__name__)


async def run_all_suites(
    ctx: ScenarioContext,
    suite_names: Optional[List[str]] = None,
    scenarios_path: Optional[str] = None,
) -> ScenarioSummary:
    """
    Run all scenario suites from SCENARIOS.yaml (or specific ones if provided).

    Args:
        ctx: Scenario context
        suite_names: Optional list of suite names to run (runs all if None)
        scenarios_path: Optional path to the scenarios file

    Returns:
        ScenarioSummary with results from all suites
    """
    start_ms = int(time.time() * 1000)
    summary = ScenarioSummary()

    executor = ScenarioExecutor(scenarios_path)
    all_suite_defs = executor.get_suites()

    if suite_names:
        unknown = [name for name in suite_names if name not in all_suite_defs]
        if unknown:
            logger.warning("Unknown scenario suite(s): %s", ", ".join(unknown))
        suites_to_run = {name: all_suite_defs[name] for name in suite_names if name in all_suite_defs}
    else:
        suites_to_run = all_suite_defs

    for suite_name in suites_to_run:
        logger.info("Running scenario suite: %s", suite_name)
        suite = ScenarioSuite(suite_name, executor)
        result = await suite.run(ctx)
        summary.add_suite(result)

    summary.duration_ms = int(time.time() * 1000) - start_ms
    return summary
