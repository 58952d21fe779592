"""Scenario actions.

To add a new action, create a class that inherits from Action and
implements the execute method. The action is registered automatically and
becomes available to SCENARIOS.yaml steps.

Example:

    class FireTwiceAction(Action):
        @property
        def name(self) -> str:
            return "fire_twice"

        async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
            await ctx.client.fire_callback(params["callback"])
            await ctx.client.fire_callback(params["callback"])

Used from SCENARIOS.yaml:

    steps:
      - action: fire_twice
        params:
          callback: closed
"""

import asyncio
import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

from .server.client import RemoteCommandRejected

if TYPE_CHECKING:
    from .scenarios.context import ScenarioContext


class Action(ABC):
    """Base class for scenario actions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Action name (e.g., 'init', 'fire_callback', 'assert_phases')."""
        pass

    @abstractmethod
    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        """
        Execute the action.

        Args:
            params: Action parameters from SCENARIOS.yaml
            ctx: Scenario context

        Returns:
            Action result (if any)

        Raises:
            AssertionError: If an assertion fails
            KeyError: If a required parameter is missing
        """
        pass


async def _run_command(ctx: "ScenarioContext", command: str, params: Dict[str, Any]) -> Any:
    client = ctx.client
    if command == "init":
        return await client.init(params.get("options", {"apiKey": ctx.api_key}))
    if command == "load":
        return await client.load(params.get("options"))
    if command == "show":
        return await client.show()
    if command == "hide":
        return await client.hide()
    if command == "is_loaded":
        return await client.is_loaded()
    if command == "set_user_details":
        return await client.set_user_details(params.get("options"))
    raise ValueError(f"Unknown command: {command}")


# ============================================================================
# Host Command Actions
# ============================================================================


class InitAction(Action):
    """Initialize the bridge; the server's recorder becomes the listener."""

    @property
    def name(self) -> str:
        return "init"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await _run_command(ctx, "init", params)


class LoadAction(Action):
    """Load with optional placement/mode options."""

    @property
    def name(self) -> str:
        return "load"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await _run_command(ctx, "load", params)


class ShowAction(Action):
    @property
    def name(self) -> str:
        return "show"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await _run_command(ctx, "show", params)


class HideAction(Action):
    @property
    def name(self) -> str:
        return "hide"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await _run_command(ctx, "hide", params)


class SetUserDetailsAction(Action):
    @property
    def name(self) -> str:
        return "set_user_details"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await _run_command(ctx, "set_user_details", params)


class ExpectRejectedAction(Action):
    """Run a command and assert the bridge rejects it."""

    @property
    def name(self) -> str:
        return "expect_rejected"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        command = params["command"]
        try:
            await _run_command(ctx, command, params)
        except RemoteCommandRejected as e:
            expected_kind = params.get("kind")
            if expected_kind and e.kind != expected_kind:
                raise AssertionError(f"Expected {command} rejected as '{expected_kind}', got '{e.kind}': {e}")
            return str(e)

        raise AssertionError(f"Expected {command} to be rejected, but it succeeded")


# ============================================================================
# SDK and Runtime Signal Actions
# ============================================================================


class FireCallbackAction(Action):
    """Fire one of the SDK callbacks on the mock SDK."""

    @property
    def name(self) -> str:
        return "fire_callback"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await ctx.client.fire_callback(params["callback"], params.get("survey"))


class SetPresenceAction(Action):
    """Set what the mock SDK reports from its presence check."""

    @property
    def name(self) -> str:
        return "set_presence"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await ctx.client.set_presence(params["present"])


class ResumeAction(Action):
    """Send the host resume signal."""

    @property
    def name(self) -> str:
        return "resume"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await ctx.client.resume()


class ExitAction(Action):
    """Send the host exit signal (session teardown)."""

    @property
    def name(self) -> str:
        return "exit"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await ctx.client.exit()


class ResetAction(Action):
    @property
    def name(self) -> str:
        return "reset"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        return await ctx.reset()


class WaitAction(Action):
    """Wait for a specified duration."""

    @property
    def name(self) -> str:
        return "wait"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        await asyncio.sleep(params.get("ms", 0) / 1000.0)


# ============================================================================
# Assertion Actions
# ============================================================================


class AssertIsLoadedAction(Action):
    """Assert the value returned by isLoaded()."""

    @property
    def name(self) -> str:
        return "assert_is_loaded"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        expected = params.get("expected", True)
        actual = await ctx.client.is_loaded()
        if actual != expected:
            raise AssertionError(f"Expected isLoaded() to be {expected}, got {actual}")


class AssertEventCountAction(Action):
    """Assert the number of delivered events, optionally of one phase."""

    @property
    def name(self) -> str:
        return "assert_event_count"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        events = await ctx.client.get_events()
        phase = params.get("phase")
        if phase:
            events = [e for e in events if e.get("phase") == phase]

        expected = params["count"]
        if len(events) != expected:
            label = f"'{phase}' events" if phase else "events"
            raise AssertionError(f"Expected {expected} {label}, got {len(events)}")


class AssertPhasesAction(Action):
    """Assert the exact sequence of delivered event phases."""

    @property
    def name(self) -> str:
        return "assert_phases"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        events = await ctx.client.get_events()
        actual: List[str] = [e.get("phase") for e in events]
        expected = params["phases"]
        if actual != expected:
            raise AssertionError(f"Expected phases {expected}, got {actual}")


class AssertEventAction(Action):
    """Assert fields of one delivered event (default: the latest)."""

    @property
    def name(self) -> str:
        return "assert_event"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        events = await ctx.client.get_events()
        if not events:
            raise AssertionError("No events delivered")

        index = params.get("index", -1)
        try:
            event = events[index]
        except IndexError:
            raise AssertionError(f"No event at index {index} (have {len(events)})")

        for field, expected in params["fields"].items():
            if field not in event:
                raise AssertionError(f"Event {index} has no field '{field}': {event}")
            if event[field] != expected:
                raise AssertionError(f"Expected event {index} {field}={expected!r}, got {event[field]!r}")


class AssertEventDataAction(Action):
    """Assert a key of the JSON survey data carried by an event."""

    @property
    def name(self) -> str:
        return "assert_event_data"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        events = await ctx.client.get_events()
        index = params.get("index", -1)
        try:
            event = events[index]
        except IndexError:
            raise AssertionError(f"No event at index {index} (have {len(events)})")

        if "data" not in event:
            raise AssertionError(f"Event {index} carries no data: {event}")

        data = json.loads(event["data"])
        field = params["field"]
        if data.get(field) != params["expected"]:
            raise AssertionError(f"Expected data.{field}={params['expected']!r}, got {data.get(field)!r}")


class AssertSdkCallCountAction(Action):
    """Assert how many times the mock SDK saw a method called."""

    @property
    def name(self) -> str:
        return "assert_sdk_call_count"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        calls = await ctx.client.get_sdk_calls()
        method = params["method"]
        actual = calls["counts"].get(method, 0)
        if actual != params["count"]:
            raise AssertionError(f"Expected {params['count']} {method} calls, got {actual}")


class AssertAttachParamAction(Action):
    """Assert a field of an attach snapshot (default: the latest)."""

    @property
    def name(self) -> str:
        return "assert_attach_param"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        calls = await ctx.client.get_sdk_calls()
        attaches = [c for c in calls["calls"] if c["method"] == "init_with"]
        if not attaches:
            raise AssertionError("No attach calls recorded")

        index = params.get("index", -1)
        snapshot = attaches[index]["params"]

        value: Any = snapshot
        for part in params["field"].split("."):
            value = value.get(part) if isinstance(value, dict) else None

        if value != params["expected"]:
            raise AssertionError(f"Expected attach {params['field']}={params['expected']!r}, got {value!r}")


class AssertSdkCallOrderAction(Action):
    """Assert the exact sequence of mock SDK methods, ignoring presence checks."""

    @property
    def name(self) -> str:
        return "assert_sdk_call_order"

    async def execute(self, params: Dict[str, Any], ctx: "ScenarioContext") -> Any:
        calls = await ctx.client.get_sdk_calls()
        actual = [c["method"] for c in calls["calls"] if c["method"] != "is_present"]
        if actual != params["methods"]:
            raise AssertionError(f"Expected SDK calls {params['methods']}, got {actual}")


# ============================================================================
# Action Registry
# ============================================================================


def get_all_actions() -> Dict[str, Action]:
    """
    Get all registered actions.

    Returns:
        Dictionary mapping action names to Action instances.
    """
    # Automatically discover all Action subclasses in this module
    import inspect
    import sys

    current_module = sys.modules[__name__]
    actions = {}

    for name, obj in inspect.getmembers(current_module, inspect.isclass):
        if issubclass(obj, Action) and obj is not Action and not inspect.isabstract(obj):
            action_instance = obj()
            actions[action_instance.name] = action_instance

    return actions
