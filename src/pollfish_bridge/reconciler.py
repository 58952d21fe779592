"""Turn SDK callbacks into host events."""

import logging
from typing import Optional

from .dispatcher import EventDispatcher
from .sdk_adapter.interface import SurveyCallbacks
from .session import Session
from .types import (
    RESPONSE_NOT_AVAILABLE,
    RESPONSE_NOT_ELIGIBLE,
    TYPE_SURVEY,
    OutboundEvent,
    Phase,
    SurveyInfo,
)

logger = logging.getLogger(__name__)


def _survey_data(info: Optional[SurveyInfo]) -> Optional[str]:
    return info.to_json() if info is not None else None


class CallbackReconciler(SurveyCallbacks):
    """
    Tracks the survey ready/open flags and emits one event per callback.

    The flag update and the dispatch happen under the session lock so a
    concurrent command never observes one without the other.
    """

    def __init__(self, session: Session, dispatcher: EventDispatcher) -> None:
        self._session = session
        self._dispatcher = dispatcher

    def on_survey_received(self, info: Optional[SurveyInfo]) -> None:
        with self._session.lock:
            self._session.survey_ready = True
            self._dispatcher.dispatch(OutboundEvent(Phase.LOADED, type=TYPE_SURVEY, data=_survey_data(info)))

    def on_survey_completed(self, info: Optional[SurveyInfo]) -> None:
        with self._session.lock:
            self._session.survey_ready = False
            self._dispatcher.dispatch(OutboundEvent(Phase.COMPLETED, type=TYPE_SURVEY, data=_survey_data(info)))

    def on_survey_not_available(self) -> None:
        self._fail(RESPONSE_NOT_AVAILABLE)

    def on_user_not_eligible(self) -> None:
        self._fail(RESPONSE_NOT_ELIGIBLE)

    def _fail(self, response: str) -> None:
        with self._session.lock:
            self._session.survey_ready = False
            self._dispatcher.dispatch(
                OutboundEvent(Phase.FAILED, type=TYPE_SURVEY, response=response, is_error=True)
            )

    def on_opened(self) -> None:
        with self._session.lock:
            self._session.survey_open = True
            self._dispatcher.dispatch(OutboundEvent(Phase.DISPLAYED, type=TYPE_SURVEY))

    def on_closed(self) -> None:
        with self._session.lock:
            # The SDK also reports a close when only the indicator is hidden.
            if not self._session.survey_open:
                logger.debug("Ignoring close signal with no survey open")
                return
            self._dispatcher.dispatch(OutboundEvent(Phase.CLOSED, type=TYPE_SURVEY))
            self._session.survey_open = False
