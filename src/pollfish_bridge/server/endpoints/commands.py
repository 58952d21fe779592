"""Host command endpoints."""

from typing import Callable, List, Tuple

from flask import Request

from .base import EndpointHandler, HandlerResult


class CommandEndpoint(EndpointHandler):
    """Exposes the bridge command surface; the server's recorder is the listener."""

    def routes(self) -> List[Tuple[str, str, Callable[..., HandlerResult]]]:
        return [
            ("/init", "POST", self.handle_init),
            ("/load", "POST", self.handle_load),
            ("/show", "POST", self.handle_show),
            ("/hide", "POST", self.handle_hide),
            ("/is_loaded", "GET", self.handle_is_loaded),
            ("/set_user_details", "POST", self.handle_set_user_details),
            ("/events", "GET", self.handle_events),
        ]

    def handle_init(self, request: Request) -> HandlerResult:
        options = self.json_body(request).get("options")
        self.state.bridge.init(self.state.recorder, options)
        return {"success": True}, 200

    def handle_load(self, request: Request) -> HandlerResult:
        options = self.json_body(request).get("options")
        self.state.bridge.load(options)
        return {"success": True}, 200

    def handle_show(self, request: Request) -> HandlerResult:
        self.state.bridge.show()
        return {"success": True}, 200

    def handle_hide(self, request: Request) -> HandlerResult:
        self.state.bridge.hide()
        return {"success": True}, 200

    def handle_is_loaded(self, request: Request) -> HandlerResult:
        return {"loaded": self.state.bridge.is_loaded()}, 200

    def handle_set_user_details(self, request: Request) -> HandlerResult:
        options = self.json_body(request).get("options")
        self.state.bridge.set_user_details(options)
        return {"success": True}, 200

    def handle_events(self, request: Request) -> HandlerResult:
        return {"events": self.state.recorder.get_events()}, 200
