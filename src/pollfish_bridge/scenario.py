"""Scenario loading and execution.

Scenarios live in SCENARIOS.yaml. Any node may be pulled in from another
file with ``!include <path>``; paths resolve against the including file.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

import yaml

from .actions import Action, get_all_actions

if TYPE_CHECKING:
    from .scenarios.context import ScenarioContext

DEFAULT_SCENARIOS_FILE = "SCENARIOS.yaml"

# repository root, for running from a checkout
_BUNDLED_SCENARIOS = Path(__file__).resolve().parents[2] / DEFAULT_SCENARIOS_FILE


class IncludeLoader(yaml.SafeLoader):
    """SafeLoader that understands ``!include``."""

    def __init__(self, stream):
        self.base_dir = Path(getattr(stream, "name", ".")).parent
        super().__init__(stream)


def _construct_include(loader: IncludeLoader, node: yaml.Node) -> Any:
    return load_yaml(loader.base_dir / loader.construct_scalar(node))


IncludeLoader.add_constructor("!include", _construct_include)


def load_yaml(path: Path) -> Any:
    with open(path) as f:
        return yaml.load(f, IncludeLoader)


def resolve_scenarios_path(scenarios_path: Optional[str] = None) -> Path:
    """
    Pick the scenarios file to load.

    An explicit path is used as given. Otherwise SCENARIOS.yaml in the
    working directory wins over the one bundled with the repository.
    """
    if scenarios_path:
        return Path(scenarios_path)
    local = Path(DEFAULT_SCENARIOS_FILE)
    return local if local.exists() else _BUNDLED_SCENARIOS


class ScenarioExecutor:
    """Runs the scenarios of one scenarios file."""

    def __init__(self, scenarios_path: Optional[str] = None):
        self.scenarios_path = resolve_scenarios_path(scenarios_path)
        self.scenarios: Dict[str, Any] = load_yaml(self.scenarios_path) or {}
        self.actions: Dict[str, Action] = get_all_actions()

    async def execute_action(self, action_name: str, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        """
        Run one action by name.

        Raises:
            ValueError: If no action has that name
        """
        action = self.actions.get(action_name)
        if action is None:
            raise ValueError(f"Unknown action: {action_name}")
        return await action.execute(params, ctx)

    async def run_scenario(self, scenario_def: Dict[str, Any], ctx: "ScenarioContext") -> None:
        """
        Reset the bridge, then run the scenario's steps in order.

        Step failures are re-raised with the step number and action name
        prepended; a missing parameter surfaces as a ValueError.
        """
        await ctx.reset()

        for number, step in enumerate(scenario_def.get("steps", []), start=1):
            action = step["action"]
            params = step.get("params") or {}
            where = f"step {number} ({action})"

            try:
                await self.execute_action(action, params, ctx)
            except KeyError as e:
                raise ValueError(f"{where}: missing required parameter {e}; got {sorted(params)}") from e
            except AssertionError as e:
                raise AssertionError(f"{where}: {e}") from e

    def get_suites(self) -> Dict[str, Any]:
        """Suite definitions keyed by suite name."""
        return self.scenarios.get("scenario_suites", {})
