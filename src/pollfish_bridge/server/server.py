"""HTTP server hosting one bridge."""

import logging
from typing import Any, Callable, List

from flask import Flask, Response, jsonify, request

from ..errors import CommandRejectedError
from ..metadata import PLUGIN_NAME, PLUGIN_VERSION, sdk_version_for
from .endpoints import CommandEndpoint, ControlEndpoint, EndpointHandler
from .state import BridgeServerState

logger = logging.getLogger(__name__)


class BridgeServer:
    """Serves the bridge command surface plus control endpoints for the mock SDK."""

    def __init__(self, state: BridgeServerState | None = None) -> None:
        """
        Initialize the server.

        Args:
            state: Optional BridgeServerState to use (creates new one if not provided)
        """
        self.state = state or BridgeServerState()
        self.app = Flask(__name__)
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Set up all Flask routes."""
        handlers: List[EndpointHandler] = [
            CommandEndpoint(self.state),
            ControlEndpoint(self.state),
        ]

        for handler in handlers:
            for path, method, handler_func in handler.routes():
                # Wrap handler to report rejections and let queued work finish
                def make_handler(h: Callable[..., Any], http_method: str) -> Callable[..., Any]:
                    def wrapper(**kwargs: Any) -> Any:
                        if http_method == "GET":
                            self.state.settle()
                        try:
                            body, status = h(request, **kwargs)
                        except CommandRejectedError as e:
                            logger.error("%s %s rejected: %s", http_method, request.path, e)
                            body, status = {"error": str(e), "kind": e.kind}, 400
                        self.state.settle()
                        return jsonify(body), status

                    return wrapper

                self.app.add_url_rule(
                    path,
                    endpoint=f"{path}_{method}",
                    view_func=make_handler(handler_func, method),
                    methods=[method],
                )

        @self.app.route("/", methods=["GET"])
        @self.app.route("/health", methods=["GET"])
        def health() -> Response:
            """Health check endpoint."""
            return jsonify(
                {
                    "bridge_name": PLUGIN_NAME,
                    "bridge_version": PLUGIN_VERSION,
                    "sdk_version": sdk_version_for(self.state.bridge.metadata),
                }
            )

    def run(self, host: str = "0.0.0.0", port: int = 8090, debug: bool = False) -> None:
        """
        Run the Flask app.

        Args:
            host: Host to bind to
            port: Port to bind to
            debug: Enable debug mode
        """
        self.app.run(host=host, port=port, debug=debug)
