"""Pollfish survey SDK bridge.

Exposes the survey SDK's lifecycle to a host runtime through a small
stateful command surface and re-emits the SDK's callbacks as one ordered
event stream.
"""

__version__ = "1.2.0"

from .bridge import COMMANDS, PollfishBridge
from .errors import (
    AlreadyInitializedError,
    ArityError,
    BridgeError,
    CommandRejectedError,
    InvalidOptionValueError,
    ListenerError,
    MissingOptionError,
    NotInitializedError,
    NotRegisteredError,
    OptionError,
    OptionTypeError,
    UnknownOptionError,
)
from .executor import Executor, ImmediateExecutor, SerialExecutor
from .metadata import AppMetadata, StaticAppMetadata
from .placement import resolve_placement
from .sdk_adapter import MockSurveySDK, SurveyCallbacks, SurveySDKInterface
from .session import Session
from .types import (
    AttachParams,
    Gender,
    OutboundEvent,
    Phase,
    Placement,
    RequestConfig,
    SurveyInfo,
    UserAttributes,
)
from .validation import validate_options

__all__ = [
    "__version__",
    "COMMANDS",
    "PollfishBridge",
    "AlreadyInitializedError",
    "ArityError",
    "BridgeError",
    "CommandRejectedError",
    "InvalidOptionValueError",
    "ListenerError",
    "MissingOptionError",
    "NotInitializedError",
    "NotRegisteredError",
    "OptionError",
    "OptionTypeError",
    "UnknownOptionError",
    "Executor",
    "ImmediateExecutor",
    "SerialExecutor",
    "AppMetadata",
    "StaticAppMetadata",
    "resolve_placement",
    "MockSurveySDK",
    "SurveyCallbacks",
    "SurveySDKInterface",
    "Session",
    "AttachParams",
    "Gender",
    "OutboundEvent",
    "Phase",
    "Placement",
    "RequestConfig",
    "SurveyInfo",
    "UserAttributes",
    "validate_options",
]
