"""Shared fixtures for the bridge tests."""

from typing import Any, Callable, Dict, List, Optional

import pytest

from pollfish_bridge import ImmediateExecutor, MockSurveySDK, PollfishBridge, StaticAppMetadata
from pollfish_bridge.executor import Executor
from pollfish_bridge.metadata import TARGET_STORE_KEY
from pollfish_bridge.server import BridgeClient, BridgeServer, BridgeServerState, EventRecorder, RemoteCommandRejected


class QueueExecutor(Executor):
    """Holds submitted tasks until the test runs them."""

    def __init__(self, name: str = "queued") -> None:
        self.name = name
        self.tasks: List[Callable[[], Any]] = []

    def submit(self, task: Callable[[], Any]) -> None:
        self.tasks.append(task)

    def run_all(self) -> int:
        ran = 0
        while self.tasks:
            self.tasks.pop(0)()
            ran += 1
        return ran


class FlaskBridgeClient(BridgeClient):
    """BridgeClient that talks to a Flask test client instead of the network."""

    def __init__(self, test_client: Any) -> None:
        super().__init__("http://testserver")
        self._client = test_client

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        resp = self._client.open(path, method=method, json=payload)
        data = resp.get_json()
        if resp.status_code == 400 and "kind" in data:
            raise RemoteCommandRejected(data["kind"], data.get("error", ""))
        if resp.status_code != 200:
            raise RuntimeError(f"{method} {path} failed with {resp.status_code}: {data}")
        return data


@pytest.fixture
def sdk() -> MockSurveySDK:
    return MockSurveySDK()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def queue_executor() -> QueueExecutor:
    return QueueExecutor()


@pytest.fixture
def bridge(sdk: MockSurveySDK) -> PollfishBridge:
    """Bridge whose SDK work and event delivery run inline."""
    return PollfishBridge(
        sdk,
        ui_executor=ImmediateExecutor("ui"),
        host_executor=ImmediateExecutor("host"),
        metadata=StaticAppMetadata({TARGET_STORE_KEY: "google"}),
    )


@pytest.fixture
def ready_bridge(bridge: PollfishBridge, recorder: EventRecorder) -> PollfishBridge:
    """Bridge with a registered listener."""
    bridge.init(recorder, {"apiKey": "K"})
    return bridge


@pytest.fixture
def server_state() -> BridgeServerState:
    return BridgeServerState(
        metadata=StaticAppMetadata({TARGET_STORE_KEY: "google"}),
        ui_executor=ImmediateExecutor("ui"),
        host_executor=ImmediateExecutor("host"),
    )


@pytest.fixture
def server(server_state: BridgeServerState) -> BridgeServer:
    return BridgeServer(server_state)


@pytest.fixture
def http(server: BridgeServer):
    return server.app.test_client()


@pytest.fixture
def scenario_client(http) -> FlaskBridgeClient:
    return FlaskBridgeClient(http)
