"""Bridge server endpoint handlers."""

from .base import EndpointHandler
from .commands import CommandEndpoint
from .control import ControlEndpoint

__all__ = ["EndpointHandler", "CommandEndpoint", "ControlEndpoint"]
