"""Bridge server state: one bridge, its mock SDK and the recorded events."""

import threading
from typing import Any, Dict, List, Optional

from ..bridge import PollfishBridge
from ..executor import Executor
from ..metadata import AppMetadata
from ..sdk_adapter import MockSurveySDK
from ..types import AttachParams, SDKCall


class EventRecorder:
    """Host listener that records every delivered event."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: List[Dict[str, Any]] = []

    def __call__(self, event: Dict[str, Any]) -> None:
        with self._lock:
            self._events.append(dict(event))

    def get_events(self) -> List[Dict[str, Any]]:
        """Get all recorded events, oldest first."""
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def serialize_params(params: Optional[AttachParams]) -> Optional[Dict[str, Any]]:
    """JSON-friendly view of an attach snapshot (callbacks omitted)."""
    if params is None:
        return None
    attributes = params.user_attributes
    return {
        "api_key": params.api_key,
        "placement": params.placement.value,
        "padding": params.padding,
        "release_mode": params.release_mode,
        "offerwall_mode": params.offerwall_mode,
        "reward_mode": params.reward_mode,
        "request_uuid": params.request_uuid,
        "user_attributes": (
            None
            if attributes is None
            else {"gender": attributes.gender.value if attributes.gender else None}
        ),
    }


def serialize_call(call: SDKCall) -> Dict[str, Any]:
    return {
        "timestamp_ms": call.timestamp_ms,
        "method": call.method,
        "params": serialize_params(call.params),
    }


class BridgeServerState:
    """Owns the bridge served over HTTP, backed by the mock SDK."""

    def __init__(
        self,
        metadata: Optional[AppMetadata] = None,
        ui_executor: Optional[Executor] = None,
        host_executor: Optional[Executor] = None,
        settle_timeout: float = 2.0,
    ) -> None:
        self.sdk = MockSurveySDK()
        self.bridge = PollfishBridge(
            self.sdk,
            ui_executor=ui_executor,
            host_executor=host_executor,
            metadata=metadata,
        )
        self.recorder = EventRecorder()
        self.settle_timeout = settle_timeout

    def settle(self) -> bool:
        """Wait until queued SDK work and event deliveries have finished."""
        return self.bridge.wait_idle(self.settle_timeout)

    def reset(self) -> None:
        """Tear the session down and clear the mock SDK and recorded events."""
        self.bridge.on_exiting()
        self.settle()
        self.sdk.reset()
        self.recorder.clear()

    def shutdown(self) -> None:
        self.bridge.shutdown()
