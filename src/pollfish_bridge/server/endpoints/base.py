"""Base endpoint handler interface."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Tuple

from flask import Request

from ..state import BridgeServerState

HandlerResult = Tuple[Dict[str, Any], int]


class EndpointHandler(ABC):
    """Base class for endpoint handlers."""

    def __init__(self, state: BridgeServerState) -> None:
        self.state = state

    @abstractmethod
    def routes(self) -> List[Tuple[str, str, Callable[..., HandlerResult]]]:
        """
        Return list of (path, method, handler) tuples.

        Handlers take the Flask request plus any URL variables and return
        (response_body_dict, status_code).

        Example:
            [
                ('/load', 'POST', self.handle_load),
                ('/_control/callbacks/<name>', 'POST', self.handle_callback),
            ]
        """
        pass

    @staticmethod
    def json_body(request: Request) -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
