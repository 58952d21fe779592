"""Per-runtime bridge session and registration state."""

import threading
from typing import Any, Callable, Dict, Optional

from .errors import NotInitializedError, NotRegisteredError
from .types import RequestConfig

Listener = Callable[[Dict[str, Any]], Any]


class Session:
    """
    Shared state for one runtime instance.

    Host commands and SDK callbacks both touch these fields from different
    threads; every read-check-write goes through ``lock``.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.listener: Optional[Listener] = None
        self.registered = False
        self.loaded_once = False
        self.survey_open = False
        self.survey_ready = False
        self.config: Optional[RequestConfig] = None

    def can_init(self) -> bool:
        """True while no listener has been registered."""
        with self.lock:
            return self.listener is None

    def mark_initiated(self, listener: Listener) -> None:
        with self.lock:
            self.listener = listener

    def mark_registered(self) -> None:
        with self.lock:
            self.registered = True

    def is_operational(self) -> bool:
        """True once init has registered a listener and completed its round-trip."""
        with self.lock:
            return self.listener is not None and self.registered

    def require_operational(self) -> None:
        """
        Gate for every command other than init.

        Raises:
            NotInitializedError: If init() has not been called
            NotRegisteredError: If init() has not completed yet
        """
        with self.lock:
            if self.listener is None:
                raise NotInitializedError()
            if not self.registered:
                raise NotRegisteredError()

    def reset(self) -> None:
        """Tear down: clear all state and release the listener."""
        with self.lock:
            self.listener = None
            self.registered = False
            self.loaded_once = False
            self.survey_open = False
            self.survey_ready = False
            self.config = None
