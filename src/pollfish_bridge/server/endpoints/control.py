"""Control endpoints: drive the mock SDK and the host lifecycle."""

from typing import Callable, List, Tuple

from flask import Request

from ...sdk_adapter import SDKNotAttachedError
from ...types import SurveyInfo
from ..state import serialize_call
from .base import EndpointHandler, HandlerResult


class ControlEndpoint(EndpointHandler):
    """Fires SDK callbacks and runtime signals, and exposes recorded SDK calls."""

    def routes(self) -> List[Tuple[str, str, Callable[..., HandlerResult]]]:
        return [
            ("/_control/callbacks/<name>", "POST", self.handle_callback),
            ("/_control/presence", "POST", self.handle_presence),
            ("/_control/resume", "POST", self.handle_resume),
            ("/_control/exit", "POST", self.handle_exit),
            ("/_control/reset", "POST", self.handle_reset),
            ("/_control/sdk_calls", "GET", self.handle_sdk_calls),
        ]

    def handle_callback(self, request: Request, name: str) -> HandlerResult:
        survey = self.json_body(request).get("survey")
        info = SurveyInfo.from_dict(survey) if isinstance(survey, dict) else None

        try:
            self.state.sdk.fire(name, info)
        except ValueError as e:
            return {"error": str(e)}, 404
        except SDKNotAttachedError as e:
            return {"error": str(e)}, 409

        return {"success": True}, 200

    def handle_presence(self, request: Request) -> HandlerResult:
        present = self.json_body(request).get("present")
        if not isinstance(present, bool):
            return {"error": "Missing boolean 'present' in request body"}, 400
        self.state.sdk.set_present(present)
        return {"success": True}, 200

    def handle_resume(self, request: Request) -> HandlerResult:
        self.state.bridge.on_resumed()
        return {"success": True}, 200

    def handle_exit(self, request: Request) -> HandlerResult:
        self.state.bridge.on_exiting()
        return {"success": True}, 200

    def handle_reset(self, request: Request) -> HandlerResult:
        self.state.reset()
        return {"success": True}, 200

    def handle_sdk_calls(self, request: Request) -> HandlerResult:
        return {
            "calls": [serialize_call(c) for c in self.state.sdk.get_calls()],
            "counts": self.state.sdk.call_counts(),
        }, 200
