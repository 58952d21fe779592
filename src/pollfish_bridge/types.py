"""Shared types for the Pollfish bridge."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .sdk_adapter.interface import SurveyCallbacks

PROVIDER_NAME = "pollfish"
EVENT_NAME = "adsRequest"
TYPE_SURVEY = "survey"

RESPONSE_NOT_AVAILABLE = "notAvailable"
RESPONSE_NOT_ELIGIBLE = "notEligible"


class Phase(str, Enum):
    """Lifecycle stage reported in an outbound event."""

    INIT = "init"
    LOADED = "loaded"
    DISPLAYED = "displayed"
    CLOSED = "closed"
    COMPLETED = "completed"
    FAILED = "failed"


class Placement(str, Enum):
    """On-screen anchor of the survey indicator."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    MIDDLE_LEFT = "middle-left"
    MIDDLE_RIGHT = "middle-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass
class UserAttributes:
    """User properties forwarded to the SDK with the attach call."""

    gender: Optional[Gender] = None


@dataclass
class RequestConfig:
    """Derived request configuration, mutated by init/load/setUserDetails."""

    api_key: str
    request_id: Optional[str] = None
    placement: Placement = Placement.BOTTOM_RIGHT
    padding: int = 0
    developer_mode: bool = False
    custom_mode: bool = False
    offerwall_mode: bool = False
    reward_mode: bool = False
    user_attributes: Optional[UserAttributes] = None


@dataclass(frozen=True)
class AttachParams:
    """Snapshot of a RequestConfig handed to the SDK attach call."""

    api_key: str
    placement: Placement
    padding: int
    release_mode: bool
    offerwall_mode: bool
    reward_mode: bool
    callbacks: "SurveyCallbacks"
    request_uuid: Optional[str] = None
    user_attributes: Optional[UserAttributes] = None


@dataclass
class SurveyInfo:
    """Survey metadata reported by the SDK."""

    survey_cpa: int = 0
    survey_ir: int = 0
    survey_loi: int = 0
    survey_class: str = ""
    reward_name: str = ""
    reward_value: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SurveyInfo":
        """Build from a host-style mapping (camelCase keys)."""
        return cls(
            survey_cpa=data.get("surveyCPA", 0),
            survey_ir=data.get("surveyIR", 0),
            survey_loi=data.get("surveyLOI", 0),
            survey_class=data.get("surveyClass", ""),
            reward_name=data.get("rewardName", ""),
            reward_value=data.get("rewardValue", 0),
        )

    def to_json(self) -> str:
        """Serialize into the payload carried by loaded/completed events."""
        return json.dumps(
            {
                "playfulSurvey": self.survey_class.endswith("Playful"),
                "surveyPrice": self.survey_cpa,
                "surveyCPA": self.survey_cpa,
                "surveyIR": self.survey_ir,
                "surveyLOI": self.survey_loi,
                "surveyClass": self.survey_class,
                "rewardName": self.reward_name,
                "rewardValue": self.reward_value,
            }
        )


@dataclass
class OutboundEvent:
    """A notification delivered to the host listener."""

    phase: Phase
    type: Optional[str] = None
    data: Optional[str] = None
    response: Optional[str] = None
    is_error: bool = False
    provider: str = PROVIDER_NAME

    def to_dict(self) -> Dict[str, Any]:
        """Host-facing mapping; absent optional fields are omitted."""
        event: Dict[str, Any] = {"name": EVENT_NAME, "phase": self.phase.value}
        if self.type is not None:
            event["type"] = self.type
        if self.data is not None:
            event["data"] = self.data
        if self.response is not None:
            event["response"] = self.response
        event["isError"] = self.is_error
        event["provider"] = self.provider
        return event


@dataclass
class SDKCall:
    """A call recorded by the mock SDK."""

    timestamp_ms: int
    method: str
    params: Optional[AttachParams] = None


@dataclass
class HealthResponse:
    """Bridge server health response."""

    bridge_name: str
    bridge_version: str
    sdk_version: str


@dataclass
class ScenarioResult:
    """Result of a single scenario."""

    name: str
    passed: bool
    duration_ms: int
    message: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


@dataclass
class ScenarioSuiteResult:
    """Result of a scenario suite."""

    name: str
    results: List[ScenarioResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)


@dataclass
class ScenarioSummary:
    """Summary of all scenario results."""

    suites: List[ScenarioSuiteResult] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def total(self) -> int:
        return sum(suite.total for suite in self.suites)

    @property
    def passed(self) -> int:
        return sum(suite.passed for suite in self.suites)

    @property
    def failed(self) -> int:
        return sum(suite.failed for suite in self.suites)

    def add_suite(self, suite: ScenarioSuiteResult) -> None:
        self.suites.append(suite)
