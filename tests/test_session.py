"""Tests for registration state."""

import pytest

from pollfish_bridge.errors import NotInitializedError, NotRegisteredError
from pollfish_bridge.session import Session
from pollfish_bridge.types import RequestConfig


def listener(event):
    pass


def test_fresh_session():
    session = Session()
    assert session.can_init()
    assert not session.is_operational()
    with pytest.raises(NotInitializedError):
        session.require_operational()


def test_initiated_but_not_registered():
    session = Session()
    session.mark_initiated(listener)
    assert not session.can_init()
    assert not session.is_operational()
    with pytest.raises(NotRegisteredError):
        session.require_operational()


def test_registered_is_operational():
    session = Session()
    session.mark_initiated(listener)
    session.mark_registered()
    assert session.is_operational()
    session.require_operational()


def test_reset_clears_everything():
    session = Session()
    session.mark_initiated(listener)
    session.mark_registered()
    session.loaded_once = True
    session.survey_open = True
    session.survey_ready = True
    session.config = RequestConfig(api_key="K")

    session.reset()

    assert session.listener is None
    assert not session.registered
    assert not session.loaded_once
    assert not session.survey_open
    assert not session.survey_ready
    assert session.config is None
    assert session.can_init()
