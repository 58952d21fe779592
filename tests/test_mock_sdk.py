"""Tests for the mock survey SDK."""

from unittest.mock import MagicMock

import pytest

from pollfish_bridge.sdk_adapter import MockSurveySDK, SDKNotAttachedError, SurveyCallbacks
from pollfish_bridge.types import AttachParams, Placement, SurveyInfo


def attach(sdk, callbacks):
    sdk.init_with(
        AttachParams(
            api_key="K",
            placement=Placement.BOTTOM_RIGHT,
            padding=0,
            release_mode=True,
            offerwall_mode=False,
            reward_mode=False,
            callbacks=callbacks,
        )
    )


@pytest.fixture
def callbacks():
    return MagicMock(spec=SurveyCallbacks)


def test_fire_before_attach(sdk):
    with pytest.raises(SDKNotAttachedError):
        sdk.fire("received")


def test_unknown_callback(sdk, callbacks):
    attach(sdk, callbacks)
    with pytest.raises(ValueError):
        sdk.fire("exploded")


def test_received_makes_survey_present(sdk, callbacks):
    attach(sdk, callbacks)
    info = SurveyInfo(survey_cpa=10)
    sdk.fire("received", info)

    callbacks.on_survey_received.assert_called_once_with(info)
    assert sdk.is_present()


@pytest.mark.parametrize("name", ["completed", "not_available", "not_eligible"])
def test_consuming_outcomes_clear_presence(sdk, callbacks, name):
    attach(sdk, callbacks)
    sdk.set_present(True)
    sdk.fire(name)
    assert not sdk.is_present()


def test_opened_and_closed_keep_presence(sdk, callbacks):
    attach(sdk, callbacks)
    sdk.set_present(True)
    sdk.fire("opened")
    sdk.fire("closed")
    callbacks.on_opened.assert_called_once_with()
    callbacks.on_closed.assert_called_once_with()
    assert sdk.is_present()


def test_hide_reports_close(sdk, callbacks):
    attach(sdk, callbacks)
    sdk.hide()
    callbacks.on_closed.assert_called_once_with()


def test_hide_without_close_signal(callbacks):
    sdk = MockSurveySDK(close_on_hide=False)
    attach(sdk, callbacks)
    sdk.hide()
    callbacks.on_closed.assert_not_called()


def test_records_calls(sdk, callbacks):
    attach(sdk, callbacks)
    sdk.show()
    sdk.is_present()
    sdk.hide()

    assert [c.method for c in sdk.get_calls()] == ["init_with", "show", "is_present", "hide"]
    assert sdk.get_calls("init_with")[0].params.api_key == "K"
    assert sdk.call_counts() == {"init_with": 1, "show": 1, "is_present": 1, "hide": 1}


def test_reset(sdk, callbacks):
    attach(sdk, callbacks)
    sdk.set_present(True)
    sdk.reset()

    assert sdk.get_calls() == []
    with pytest.raises(SDKNotAttachedError):
        sdk.fire("closed")
    assert not sdk.is_present()
