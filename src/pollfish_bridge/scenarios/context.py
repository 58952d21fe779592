"""Scenario context."""

from typing import Any

from ..server.client import BridgeClient


class ScenarioContext:
    """Context for running scenarios against a bridge server."""

    def __init__(self, client: BridgeClient, api_key: str = "pollfish_test_key"):
        """
        Initialize scenario context.

        Args:
            client: Client for the bridge server
            api_key: API key used when a scenario's init step gives no options
        """
        self.client = client
        self.api_key = api_key

    async def reset(self) -> Any:
        """Reset the bridge session, mock SDK and recorded events."""
        return await self.client.reset()
