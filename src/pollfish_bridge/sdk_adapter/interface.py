"""Survey SDK collaborator interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from ..types import AttachParams, SurveyInfo


class SurveyCallbacks(ABC):
    """The six asynchronous notifications the SDK sends back."""

    @abstractmethod
    def on_survey_received(self, info: Optional[SurveyInfo]) -> None:
        """A survey is available to present."""
        pass

    @abstractmethod
    def on_survey_completed(self, info: Optional[SurveyInfo]) -> None:
        """The user completed a survey."""
        pass

    @abstractmethod
    def on_survey_not_available(self) -> None:
        """No survey is available for this user."""
        pass

    @abstractmethod
    def on_user_not_eligible(self) -> None:
        """The user was screened out of the survey."""
        pass

    @abstractmethod
    def on_opened(self) -> None:
        """The full survey view opened."""
        pass

    @abstractmethod
    def on_closed(self) -> None:
        """
        The SDK reports a close.

        Also sent when only the indicator is hidden.
        """
        pass


class SurveySDKInterface(ABC):
    """
    Interface the underlying survey SDK must provide.

    Every method is called from the bridge's UI executor, except
    ``is_present`` which ``isLoaded`` calls from the host thread.
    """

    @abstractmethod
    def init_with(self, params: AttachParams) -> None:
        """
        Initialize the SDK and start loading a survey.

        Calling again with a new snapshot re-attaches; the SDK treats this
        as idempotent.

        Args:
            params: Request configuration snapshot and callbacks
        """
        pass

    @abstractmethod
    def show(self) -> None:
        """Present the survey surface."""
        pass

    @abstractmethod
    def hide(self) -> None:
        """Hide the survey surface and indicator."""
        pass

    @abstractmethod
    def is_present(self) -> bool:
        """
        Report whether a survey is loaded and can be shown.

        Returns:
            True if a survey is present
        """
        pass
