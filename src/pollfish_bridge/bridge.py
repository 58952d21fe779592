"""Host-facing command surface of the Pollfish bridge.

One ``PollfishBridge`` exists per host runtime instance. It owns the
session and wires the validator, coordinator, reconciler and dispatcher
around it. Commands either raise a ``CommandRejectedError`` before
touching any state, or enqueue their SDK work and return immediately;
everything the SDK reports later arrives at the listener as an event.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .coordinator import RequestCoordinator
from .dispatcher import EventDispatcher
from .errors import AlreadyInitializedError, ArityError, CommandRejectedError, ListenerError
from .executor import Executor, SerialExecutor
from .metadata import AppMetadata, StaticAppMetadata, version_line
from .reconciler import CallbackReconciler
from .sdk_adapter.interface import SurveySDKInterface
from .session import Listener, Session
from .types import OutboundEvent, Phase
from .validation import describe_type, validate_options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandSpec:
    """How the loosely-typed host entry point maps onto a bridge method."""

    method: str
    signature: str
    min_args: int = 0
    max_args: Optional[int] = None
    arity_message: str = ""


COMMANDS: Dict[str, CommandSpec] = {
    "init": CommandSpec("init", "pollfish.init(listener, options)", 2, 2, "2 arguments expected. got {nargs}"),
    "load": CommandSpec("load", "pollfish.load( [options] )", 0, 1, "0 or 1 argument expected. got {nargs}"),
    "show": CommandSpec("show", "pollfish.show()"),
    "hide": CommandSpec("hide", "pollfish.hide()"),
    "isLoaded": CommandSpec("is_loaded", "pollfish.isLoaded()"),
    "setUserDetails": CommandSpec(
        "set_user_details", "pollfish.setUserDetails(options)", 1, 1, "missing options table."
    ),
}


class PollfishBridge:
    """Stateful bridge between a host runtime and the survey SDK."""

    def __init__(
        self,
        sdk: SurveySDKInterface,
        ui_executor: Optional[Executor] = None,
        host_executor: Optional[Executor] = None,
        metadata: Optional[AppMetadata] = None,
    ) -> None:
        """
        Initialize the bridge.

        Args:
            sdk: The survey SDK collaborator
            ui_executor: Executor all SDK calls are marshaled onto
            host_executor: Executor events are delivered on
            metadata: Host app metadata (selects the SDK variant that is logged)
        """
        self.session = Session()
        self.sdk = sdk
        self.ui_executor = ui_executor or SerialExecutor("ui")
        self.host_executor = host_executor or SerialExecutor("host")
        self.metadata = metadata or StaticAppMetadata()

        self.dispatcher = EventDispatcher(self.session, self.host_executor)
        self.reconciler = CallbackReconciler(self.session, self.dispatcher)
        self.coordinator = RequestCoordinator(self.session, sdk, self.ui_executor, self.reconciler)

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------

    def init(self, listener: Listener, options: Mapping[str, Any]) -> None:
        """
        Register the host listener and start registration with the SDK.

        A ``{phase: 'init'}`` event follows once the round-trip completes on
        the UI executor; other commands are rejected until then.

        Raises:
            AlreadyInitializedError: If a listener is already registered
            ListenerError: If the listener is not callable
            OptionError: If the options are invalid
        """
        with self.session.lock:
            if not self.session.can_init():
                raise AlreadyInitializedError()
            if not callable(listener):
                raise ListenerError(f"listener function expected, got: {describe_type(listener)}")
            validated = validate_options("init", options)
            self.session.mark_initiated(listener)

        self.ui_executor.submit(lambda: self._complete_init(listener, validated))

    def _complete_init(self, listener: Listener, options: Dict[str, Any]) -> None:
        with self.session.lock:
            if self.session.listener is not listener:
                logger.debug("Session was reset before init completed")
                return
            self.coordinator.apply_init(options)
            logger.info(version_line(self.metadata))
            # registered before the event so the listener may issue commands
            self.session.mark_registered()
            self.dispatcher.dispatch(OutboundEvent(Phase.INIT))

    def load(self, options: Optional[Mapping[str, Any]] = None) -> None:
        """Store placement and modes, then attach the SDK."""
        with self.session.lock:
            self.session.require_operational()
            validated = validate_options("load", options)
            self.coordinator.apply_load(validated)
            self.coordinator.process_request()

    def show(self) -> None:
        """Present the survey if the SDK has one; otherwise log a warning."""
        self.session.require_operational()
        self.ui_executor.submit(self._show_on_ui)

    def _show_on_ui(self) -> None:
        present = self.sdk.is_present()
        with self.session.lock:
            self.session.survey_ready = present

        if not present:
            logger.warning("%s, Survey not ready", COMMANDS["show"].signature)
            return
        self.sdk.show()

    def hide(self) -> None:
        """Hide the survey if one is ready; otherwise log a warning."""
        self.session.require_operational()
        self.ui_executor.submit(self._hide_on_ui)

    def _hide_on_ui(self) -> None:
        with self.session.lock:
            ready = self.session.survey_ready

        if not ready:
            logger.warning("%s, Survey not ready", COMMANDS["hide"].signature)
            return
        self.sdk.hide()
        with self.session.lock:
            self.session.survey_ready = False

    def is_loaded(self) -> bool:
        """
        Report whether a survey can be shown.

        A restarted SDK can report presence before any load, so load must
        also have run in this session.
        """
        self.session.require_operational()
        present = self.sdk.is_present()
        with self.session.lock:
            loaded = present and self.session.loaded_once
            self.session.survey_ready = loaded
        return loaded

    def set_user_details(self, options: Mapping[str, Any]) -> None:
        """Replace the user attributes sent with the next attach call."""
        with self.session.lock:
            self.session.require_operational()
            validated = validate_options("setUserDetails", options)
            self.coordinator.apply_user_details(validated)

    def invoke(self, command: str, *args: Any) -> Any:
        """
        Loosely-typed host entry point.

        Rejections are logged against the command's signature and turn into
        a None return, the way script callers expect.

        Args:
            command: Host command name (e.g. 'init', 'isLoaded')
            *args: Positional arguments as passed by the host

        Returns:
            The command's return value, or None if it was rejected

        Raises:
            ValueError: If the command does not exist
        """
        spec = COMMANDS.get(command)
        if spec is None:
            raise ValueError(f"Unknown command: {command}")

        try:
            with self.session.lock:
                if command == "init":
                    if not self.session.can_init():
                        raise AlreadyInitializedError()
                else:
                    self.session.require_operational()

                nargs = len(args)
                if nargs < spec.min_args or (spec.max_args is not None and nargs > spec.max_args):
                    raise ArityError(spec.arity_message.format(nargs=nargs))

                return getattr(self, spec.method)(*args)
        except CommandRejectedError as e:
            logger.error("%s, %s", spec.signature, e)
            return None

    # -------------------------------------------------------------------
    # Runtime lifecycle
    # -------------------------------------------------------------------

    def on_resumed(self) -> None:
        """Host came back to the foreground; re-attach with the stored config."""
        self.coordinator.process_request()

    def on_exiting(self) -> None:
        """Host runtime is terminating; reset the session and release the listener."""
        self.session.reset()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait for queued SDK work, then for the events it produced."""
        return self.ui_executor.wait_idle(timeout) and self.host_executor.wait_idle(timeout)

    def shutdown(self) -> None:
        """Tear down the session and stop both executors."""
        self.on_exiting()
        self.ui_executor.shutdown()
        self.host_executor.shutdown()
