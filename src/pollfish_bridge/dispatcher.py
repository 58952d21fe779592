"""Outbound event delivery to the host listener."""

import logging
from typing import Any, Dict, Mapping, Union

from .executor import Executor
from .session import Session
from .types import EVENT_NAME, PROVIDER_NAME, OutboundEvent

logger = logging.getLogger(__name__)

ERROR_KEY = "isError"
PROVIDER_KEY = "provider"


def normalize_event(event: Union[OutboundEvent, Mapping[str, Any]]) -> Dict[str, Any]:
    """Return the host-facing mapping, filling isError/provider defaults."""
    if isinstance(event, OutboundEvent):
        return event.to_dict()

    payload = dict(event)
    if hasattr(payload.get("phase"), "value"):
        payload["phase"] = payload["phase"].value
    payload.setdefault("name", EVENT_NAME)
    payload.setdefault(ERROR_KEY, False)
    payload[PROVIDER_KEY] = PROVIDER_NAME
    return payload


class EventDispatcher:
    """Marshals events onto the host executor, one at a time, in order."""

    def __init__(self, session: Session, host_executor: Executor) -> None:
        """
        Initialize the dispatcher.

        Args:
            session: Session holding the registered listener
            host_executor: Executor standing in for the host's callback context
        """
        self._session = session
        self._executor = host_executor

    def dispatch(self, event: Union[OutboundEvent, Mapping[str, Any]]) -> None:
        """
        Deliver an event to the registered listener. Never blocks.

        With no listener registered this is a no-op.
        """
        payload = normalize_event(event)

        with self._session.lock:
            listener = self._session.listener
            if listener is None:
                logger.debug("No listener registered; dropping %s event", payload.get("phase"))
                return
            self._executor.submit(lambda: self._deliver(listener, payload))

    def _deliver(self, listener: Any, payload: Dict[str, Any]) -> None:
        # events never cross a teardown
        if self._session.listener is not listener:
            logger.debug("Listener changed before delivery; dropping %s event", payload.get("phase"))
            return

        try:
            listener(payload)
        except Exception:
            logger.exception("Listener raised while handling %s event", payload.get("phase"))
