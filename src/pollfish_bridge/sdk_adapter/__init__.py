"""Survey SDK interfaces and mock."""

from .interface import SurveyCallbacks, SurveySDKInterface
from .mock import CALLBACK_NAMES, MockSurveySDK, SDKNotAttachedError

__all__ = [
    "CALLBACK_NAMES",
    "MockSurveySDK",
    "SDKNotAttachedError",
    "SurveyCallbacks",
    "SurveySDKInterface",
]
