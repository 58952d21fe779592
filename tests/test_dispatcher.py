"""Tests for event delivery."""

import logging

from pollfish_bridge.dispatcher import EventDispatcher, normalize_event
from pollfish_bridge.executor import ImmediateExecutor
from pollfish_bridge.session import Session
from pollfish_bridge.types import OutboundEvent, Phase


def make_session(listener=None):
    session = Session()
    if listener is not None:
        session.mark_initiated(listener)
        session.mark_registered()
    return session


class TestNormalizeEvent:
    def test_outbound_event(self):
        payload = normalize_event(OutboundEvent(Phase.INIT))
        assert payload == {"name": "adsRequest", "phase": "init", "isError": False, "provider": "pollfish"}

    def test_mapping_gets_defaults(self):
        payload = normalize_event({"phase": Phase.CLOSED, "type": "survey"})
        assert payload["phase"] == "closed"
        assert payload["isError"] is False
        assert payload["provider"] == "pollfish"
        assert payload["name"] == "adsRequest"

    def test_provider_always_overwritten(self):
        payload = normalize_event({"phase": "failed", "isError": True, "provider": "other"})
        assert payload["provider"] == "pollfish"
        assert payload["isError"] is True


class TestEventDispatcher:
    def test_no_listener_is_noop(self, queue_executor):
        dispatcher = EventDispatcher(make_session(), queue_executor)
        dispatcher.dispatch(OutboundEvent(Phase.INIT))
        assert queue_executor.tasks == []

    def test_delivers_in_order(self, recorder, queue_executor):
        dispatcher = EventDispatcher(make_session(recorder), queue_executor)
        dispatcher.dispatch(OutboundEvent(Phase.LOADED, type="survey"))
        dispatcher.dispatch(OutboundEvent(Phase.DISPLAYED, type="survey"))

        assert recorder.get_events() == []
        queue_executor.run_all()
        assert [e["phase"] for e in recorder.get_events()] == ["loaded", "displayed"]

    def test_dropped_after_teardown(self, recorder, queue_executor):
        session = make_session(recorder)
        dispatcher = EventDispatcher(session, queue_executor)
        dispatcher.dispatch(OutboundEvent(Phase.LOADED))

        session.reset()
        queue_executor.run_all()

        assert recorder.get_events() == []

    def test_listener_failure_is_logged(self, caplog):
        calls = []

        def listener(event):
            calls.append(event["phase"])
            raise RuntimeError("listener broke")

        dispatcher = EventDispatcher(make_session(listener), ImmediateExecutor())
        with caplog.at_level(logging.ERROR, logger="pollfish_bridge"):
            dispatcher.dispatch(OutboundEvent(Phase.INIT))
            dispatcher.dispatch(OutboundEvent(Phase.LOADED))

        assert calls == ["init", "loaded"]
        assert "Listener raised while handling init event" in caplog.text
