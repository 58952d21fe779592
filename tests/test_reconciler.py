"""Tests for SDK callback reconciliation."""

import json

import pytest

from pollfish_bridge.dispatcher import EventDispatcher
from pollfish_bridge.executor import ImmediateExecutor
from pollfish_bridge.reconciler import CallbackReconciler
from pollfish_bridge.session import Session
from pollfish_bridge.types import SurveyInfo


@pytest.fixture
def session(recorder):
    session = Session()
    session.mark_initiated(recorder)
    session.mark_registered()
    return session


@pytest.fixture
def reconciler(session):
    return CallbackReconciler(session, EventDispatcher(session, ImmediateExecutor()))


def test_received_marks_ready(reconciler, session, recorder):
    info = SurveyInfo(survey_cpa=90, survey_class="Pollfish/Playful", reward_name="Coins", reward_value=200)
    reconciler.on_survey_received(info)

    assert session.survey_ready
    event = recorder.get_events()[0]
    assert event["phase"] == "loaded"
    assert event["type"] == "survey"
    assert event["isError"] is False
    data = json.loads(event["data"])
    assert data["playfulSurvey"] is True
    assert data["surveyPrice"] == 90
    assert data["rewardName"] == "Coins"


def test_received_without_info_has_no_data(reconciler, recorder):
    reconciler.on_survey_received(None)
    assert "data" not in recorder.get_events()[0]


def test_completed_clears_ready(reconciler, session, recorder):
    session.survey_ready = True
    reconciler.on_survey_completed(SurveyInfo(survey_class="Pollfish/Basic"))

    assert not session.survey_ready
    event = recorder.get_events()[0]
    assert event["phase"] == "completed"
    assert json.loads(event["data"])["playfulSurvey"] is False


@pytest.mark.parametrize(
    "callback,response",
    [("on_survey_not_available", "notAvailable"), ("on_user_not_eligible", "notEligible")],
)
def test_failures_are_error_events(reconciler, session, recorder, callback, response):
    session.survey_ready = True
    getattr(reconciler, callback)()

    assert not session.survey_ready
    assert recorder.get_events() == [
        {
            "name": "adsRequest",
            "phase": "failed",
            "type": "survey",
            "response": response,
            "isError": True,
            "provider": "pollfish",
        }
    ]


def test_opened_then_closed(reconciler, session, recorder):
    reconciler.on_opened()
    assert session.survey_open
    reconciler.on_closed()
    assert not session.survey_open
    assert [e["phase"] for e in recorder.get_events()] == ["displayed", "closed"]


def test_close_without_open_is_dropped(reconciler, recorder):
    reconciler.on_closed()
    assert recorder.get_events() == []


def test_second_close_is_dropped(reconciler, recorder):
    reconciler.on_opened()
    reconciler.on_closed()
    reconciler.on_closed()
    assert [e["phase"] for e in recorder.get_events()] == ["displayed", "closed"]
