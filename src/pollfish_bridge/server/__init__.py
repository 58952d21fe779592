"""HTTP server and client for a hosted bridge."""

from .client import BridgeClient, RemoteCommandRejected
from .server import BridgeServer
from .state import BridgeServerState, EventRecorder

__all__ = [
    "BridgeClient",
    "BridgeServer",
    "BridgeServerState",
    "EventRecorder",
    "RemoteCommandRejected",
]
