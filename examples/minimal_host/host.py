#!/usr/bin/env python3
"""
Minimal scripted host.

Drives a running bridge server (``pollfish-bridge serve``) through one full
survey lifecycle the way a host app would:

- init with an api key
- load with a placement
- let the mock SDK report a survey, then show it
- open, complete and close the survey
- print every event the listener received
"""

import os
import sys
import time
from typing import Any, Dict, List, Optional

import requests

BRIDGE_URL = os.environ.get("POLLFISH_BRIDGE_URL", "http://localhost:8090").rstrip("/")
API_KEY = os.environ.get("POLLFISH_API_KEY", "pollfish_test_key")


class HostError(Exception):
    """The bridge rejected a command."""

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        super().__init__(f"[{kind}] {message}")


def call(method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    response = requests.request(method, f"{BRIDGE_URL}{path}", json=payload, timeout=10)
    if response.status_code == 400:
        body = response.json()
        raise HostError(body.get("kind", "rejected"), body.get("error", ""))
    response.raise_for_status()
    return response.json()


def wait_for_bridge(timeout_seconds: float = 10.0) -> Dict[str, Any]:
    deadline = time.time() + timeout_seconds
    last_error: Optional[Exception] = None
    while time.time() < deadline:
        try:
            return call("GET", "/health")
        except requests.RequestException as e:
            last_error = e
            time.sleep(0.5)
    raise TimeoutError(f"Bridge not reachable at {BRIDGE_URL}: {last_error}")


def run_lifecycle() -> List[Dict[str, Any]]:
    """Run one survey lifecycle and return the delivered events."""
    call("POST", "/_control/reset")

    call("POST", "/init", {"options": {"apiKey": API_KEY}})
    call("POST", "/load", {"options": {"yAlign": "top", "xAlign": "left", "padding": 8}})

    survey = {
        "surveyCPA": 120,
        "surveyIR": 75,
        "surveyLOI": 6,
        "surveyClass": "Pollfish/Playful",
        "rewardName": "Coins",
        "rewardValue": 50,
    }
    call("POST", "/_control/callbacks/received", {"survey": survey})

    if not call("GET", "/is_loaded")["loaded"]:
        raise RuntimeError("Survey should be loaded after the received callback")

    call("POST", "/show")
    call("POST", "/_control/callbacks/opened")
    call("POST", "/_control/callbacks/completed", {"survey": survey})
    call("POST", "/_control/callbacks/closed")

    return call("GET", "/events")["events"]


def main() -> int:
    health = wait_for_bridge()
    print(f"Connected to {health['bridge_name']} {health['bridge_version']} (SDK: {health['sdk_version']})")

    try:
        events = run_lifecycle()
    except HostError as e:
        print(f"Command rejected: {e}", file=sys.stderr)
        return 1

    for event in events:
        flag = " (error)" if event.get("isError") else ""
        print(f"  {event['phase']}{flag} {event.get('response') or event.get('data') or ''}".rstrip())

    return 0


if __name__ == "__main__":
    sys.exit(main())
