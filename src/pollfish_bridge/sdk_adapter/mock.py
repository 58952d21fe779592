"""In-process mock of the survey SDK."""

import logging
import threading
import time
from typing import Dict, List, Optional

from ..types import AttachParams, SDKCall, SurveyInfo
from .interface import SurveyCallbacks, SurveySDKInterface

logger = logging.getLogger(__name__)

CALLBACK_NAMES = (
    "received",
    "completed",
    "not_available",
    "not_eligible",
    "opened",
    "closed",
)

# outcomes that leave no survey to show
_CONSUMING = frozenset({"completed", "not_available", "not_eligible"})


class SDKNotAttachedError(RuntimeError):
    """A callback was fired before any attach call registered callbacks."""


class MockSurveySDK(SurveySDKInterface):
    """Records every call and lets callers fire SDK callbacks on demand."""

    def __init__(self, close_on_hide: bool = True) -> None:
        """
        Initialize the mock.

        Args:
            close_on_hide: Emit a 'closed' callback from hide(), as the real
                SDK does even when only the indicator is hidden
        """
        self._lock = threading.Lock()
        self._calls: List[SDKCall] = []
        self._present = False
        self._callbacks: Optional[SurveyCallbacks] = None
        self.close_on_hide = close_on_hide

    def _record(self, method: str, params: Optional[AttachParams] = None) -> None:
        self._calls.append(SDKCall(timestamp_ms=int(time.time() * 1000), method=method, params=params))

    def init_with(self, params: AttachParams) -> None:
        with self._lock:
            self._record("init_with", params)
            self._callbacks = params.callbacks

    def show(self) -> None:
        with self._lock:
            self._record("show")

    def hide(self) -> None:
        with self._lock:
            self._record("hide")
            callbacks = self._callbacks if self.close_on_hide else None
        if callbacks is not None:
            callbacks.on_closed()

    def is_present(self) -> bool:
        with self._lock:
            self._record("is_present")
            return self._present

    def set_present(self, present: bool) -> None:
        with self._lock:
            self._present = present

    def fire(self, name: str, info: Optional[SurveyInfo] = None) -> None:
        """
        Fire one of the six SDK callbacks.

        Args:
            name: Callback name (see CALLBACK_NAMES)
            info: Survey metadata for 'received' and 'completed'

        Raises:
            ValueError: If the callback name is unknown
            SDKNotAttachedError: If nothing has been attached yet
        """
        if name not in CALLBACK_NAMES:
            raise ValueError(f"Unknown callback: {name}")

        with self._lock:
            callbacks = self._callbacks
            if callbacks is None:
                raise SDKNotAttachedError("SDK has not been attached; call load() first")
            if name == "received":
                self._present = True
            elif name in _CONSUMING:
                self._present = False

        logger.debug("Mock SDK firing %s", name)

        if name == "received":
            callbacks.on_survey_received(info)
        elif name == "completed":
            callbacks.on_survey_completed(info)
        elif name == "not_available":
            callbacks.on_survey_not_available()
        elif name == "not_eligible":
            callbacks.on_user_not_eligible()
        elif name == "opened":
            callbacks.on_opened()
        else:
            callbacks.on_closed()

    def get_calls(self, method: Optional[str] = None) -> List[SDKCall]:
        """Get recorded calls, optionally only those of one method."""
        with self._lock:
            if method is None:
                return list(self._calls)
            return [c for c in self._calls if c.method == method]

    def call_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        with self._lock:
            for call in self._calls:
                counts[call.method] = counts.get(call.method, 0) + 1
        return counts

    def reset(self) -> None:
        """Reset all state."""
        with self._lock:
            self._calls.clear()
            self._present = False
            self._callbacks = None
