"""Tests for the HTTP surface of a hosted bridge."""

from pollfish_bridge import StaticAppMetadata
from pollfish_bridge.server import BridgeServer, BridgeServerState


def init(http, options=None):
    return http.post("/init", json={"options": options or {"apiKey": "K"}})


def test_health(http):
    resp = http.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "bridge_name": "plugin.pollfish",
        "bridge_version": "1.2.0",
        "sdk_version": "6.4.0 for Google Play",
    }


def test_health_without_target_store():
    server = BridgeServer(BridgeServerState(metadata=StaticAppMetadata()))
    try:
        data = server.app.test_client().get("/").get_json()
    finally:
        server.state.shutdown()
    assert data["sdk_version"] == "6.4.0 Universal"


def test_init_and_events(http):
    assert init(http).status_code == 200
    events = http.get("/events").get_json()["events"]
    assert [e["phase"] for e in events] == ["init"]


def test_rejections_carry_kind(http):
    resp = http.post("/load", json={})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "not_initialized"

    init(http)
    resp = init(http)
    assert resp.get_json() == {"error": "init() can only be called once", "kind": "already_initialized"}

    resp = http.post("/load", json={"options": {"foo": 1}})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "unknown_option"


def test_is_loaded_flow(http):
    init(http)
    http.post("/load", json={"options": {"yAlign": "top"}})
    assert http.get("/is_loaded").get_json() == {"loaded": False}

    http.post("/_control/callbacks/received", json={"survey": {"surveyCPA": 12, "surveyClass": "Pollfish/Playful"}})
    assert http.get("/is_loaded").get_json() == {"loaded": True}

    events = http.get("/events").get_json()["events"]
    assert events[-1]["phase"] == "loaded"
    assert '"surveyPrice": 12' in events[-1]["data"]


def test_callback_errors(http):
    resp = http.post("/_control/callbacks/received")
    assert resp.status_code == 409

    init(http)
    http.post("/load")
    resp = http.post("/_control/callbacks/exploded")
    assert resp.status_code == 404


def test_presence_requires_boolean(http):
    assert http.post("/_control/presence", json={"present": "yes"}).status_code == 400
    assert http.post("/_control/presence", json={"present": True}).status_code == 200


def test_sdk_calls_serialized(http):
    init(http)
    http.post("/set_user_details", json={"options": {"gender": "male"}})
    http.post("/load", json={"options": {"xAlign": "left", "padding": 3}})
    http.post("/_control/resume")

    data = http.get("/_control/sdk_calls").get_json()
    assert data["counts"] == {"init_with": 2}
    params = data["calls"][0]["params"]
    assert params["placement"] == "bottom-left"
    assert params["padding"] == 3
    assert params["api_key"] == "K"
    assert params["user_attributes"] == {"gender": "male"}


def test_exit_and_reset(http, server_state):
    init(http)
    http.post("/load")
    http.post("/_control/exit")
    assert http.post("/show").get_json()["kind"] == "not_initialized"

    http.post("/_control/reset")
    assert http.get("/events").get_json() == {"events": []}
    assert http.get("/_control/sdk_calls").get_json() == {"calls": [], "counts": {}}
    assert server_state.bridge.session.can_init()


def test_threaded_state_settles_before_reads():
    state = BridgeServerState()
    http = BridgeServer(state).app.test_client()
    try:
        init(http)
        http.post("/load")
        http.post("/_control/callbacks/received")
        http.post("/_control/callbacks/opened")
        events = http.get("/events").get_json()["events"]
    finally:
        state.shutdown()

    assert [e["phase"] for e in events] == ["init", "loaded", "displayed"]


def test_load_with_infinite_padding(http):
    init(http)
    resp = http.post("/load", data='{"options": {"padding": Infinity}}', content_type="application/json")
    assert resp.status_code == 200

    params = http.get("/_control/sdk_calls").get_json()["calls"][0]["params"]
    assert params["padding"] == 2**31 - 1
