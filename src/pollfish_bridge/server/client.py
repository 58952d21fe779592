"""HTTP client for a hosted bridge."""

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp

from ..errors import CommandRejectedError
from ..types import HealthResponse


class RemoteCommandRejected(CommandRejectedError):
    """The hosted bridge rejected a command."""

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        super().__init__(message)


class BridgeClient:
    """HTTP client for communicating with a BridgeServer."""

    def __init__(self, base_url: str) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL of the bridge server (e.g., "http://localhost:8090")
        """
        self.base_url = base_url.rstrip("/")

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        async with aiohttp.ClientSession() as session:
            async with session.request(method, f"{self.base_url}{path}", json=payload) as resp:
                if resp.status == 400:
                    data = await resp.json()
                    if "kind" in data:
                        raise RemoteCommandRejected(data["kind"], data.get("error", ""))
                resp.raise_for_status()
                return await resp.json()

    async def health(self) -> HealthResponse:
        """Get bridge server health information."""
        data = await self._request("GET", "/health")
        return HealthResponse(
            bridge_name=data["bridge_name"],
            bridge_version=data["bridge_version"],
            sdk_version=data["sdk_version"],
        )

    async def init(self, options: Any) -> Dict[str, Any]:
        """Register the server's event recorder and initialize the bridge."""
        return await self._request("POST", "/init", {"options": options})

    async def load(self, options: Any = None) -> Dict[str, Any]:
        return await self._request("POST", "/load", {"options": options})

    async def show(self) -> Dict[str, Any]:
        return await self._request("POST", "/show")

    async def hide(self) -> Dict[str, Any]:
        return await self._request("POST", "/hide")

    async def is_loaded(self) -> bool:
        data = await self._request("GET", "/is_loaded")
        return data["loaded"]

    async def set_user_details(self, options: Any) -> Dict[str, Any]:
        return await self._request("POST", "/set_user_details", {"options": options})

    async def get_events(self) -> List[Dict[str, Any]]:
        """Get every event delivered to the server's listener."""
        data = await self._request("GET", "/events")
        return data["events"]

    async def fire_callback(self, name: str, survey: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Fire an SDK callback on the server's mock SDK.

        Args:
            name: Callback name (received, completed, not_available,
                not_eligible, opened, closed)
            survey: Survey metadata for received/completed
        """
        return await self._request("POST", f"/_control/callbacks/{name}", {"survey": survey})

    async def set_presence(self, present: bool) -> Dict[str, Any]:
        return await self._request("POST", "/_control/presence", {"present": present})

    async def resume(self) -> Dict[str, Any]:
        return await self._request("POST", "/_control/resume")

    async def exit(self) -> Dict[str, Any]:
        return await self._request("POST", "/_control/exit")

    async def reset(self) -> Dict[str, Any]:
        """Reset bridge session, mock SDK and recorded events."""
        return await self._request("POST", "/_control/reset")

    async def get_sdk_calls(self) -> Dict[str, Any]:
        """Get calls recorded by the mock SDK, with per-method counts."""
        return await self._request("GET", "/_control/sdk_calls")

    async def wait_for_health(self, timeout_seconds: int = 30) -> HealthResponse:
        """
        Wait for the bridge server to be ready.

        Args:
            timeout_seconds: Maximum time to wait in seconds

        Returns:
            HealthResponse when the server is ready

        Raises:
            TimeoutError: If the server doesn't become ready in time
        """
        loop = asyncio.get_running_loop()
        start = loop.time()
        last_error = None

        while loop.time() - start < timeout_seconds:
            try:
                return await self.health()
            except Exception as e:
                last_error = e
                await asyncio.sleep(0.5)

        raise TimeoutError(
            f"Bridge server not ready after {timeout_seconds}s. Last error: {last_error}"
        )
