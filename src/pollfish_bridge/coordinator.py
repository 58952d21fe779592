"""Request configuration and the SDK attach cycle."""

import logging
import math
from typing import Any, Dict, Optional

from .errors import NotRegisteredError
from .executor import Executor
from .placement import resolve_placement
from .sdk_adapter.interface import SurveyCallbacks, SurveySDKInterface
from .session import Session
from .types import AttachParams, Gender, RequestConfig, UserAttributes

logger = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def to_int32(value: float) -> int:
    """
    Truncate a host number to a 32-bit int.

    NaN becomes 0; infinities and out-of-range values saturate.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return INT32_MAX if value > 0 else INT32_MIN
    return max(INT32_MIN, min(INT32_MAX, int(value)))


class RequestCoordinator:
    """
    Owns the session's RequestConfig and re-attaches the SDK from it.

    The attach call is re-issued on every load and every host resume so the
    placement and modes survive suspend/resume without another load.
    """

    def __init__(
        self,
        session: Session,
        sdk: SurveySDKInterface,
        ui_executor: Executor,
        callbacks: SurveyCallbacks,
    ) -> None:
        self._session = session
        self._sdk = sdk
        self._ui = ui_executor
        self._callbacks = callbacks

    def _config(self) -> RequestConfig:
        config = self._session.config
        if config is None:
            raise NotRegisteredError()
        return config

    def apply_init(self, options: Dict[str, Any]) -> RequestConfig:
        """Store a fresh config from validated init options."""
        config = RequestConfig(
            api_key=options["apiKey"],
            request_id=options.get("requestUUID"),
            developer_mode=options.get("developerMode", False),
            reward_mode=options.get("rewardMode", False),
        )
        with self._session.lock:
            self._session.config = config
        return config

    def apply_load(self, options: Dict[str, Any]) -> None:
        """Store validated load options. Omitted options fall back to their defaults."""
        placement = resolve_placement(options.get("yAlign"), options.get("xAlign"))
        padding = to_int32(options.get("padding", 0))
        custom_mode = options.get("customMode", False)
        offerwall_mode = options.get("offerwallMode", False)
        reward_mode = options.get("rewardMode", False)

        with self._session.lock:
            config = self._config()
            config.placement = placement
            config.padding = padding
            config.custom_mode = custom_mode
            config.offerwall_mode = offerwall_mode
            config.reward_mode = reward_mode
            self._session.loaded_once = True

    def apply_user_details(self, options: Dict[str, Any]) -> None:
        """Replace the user attributes from validated setUserDetails options."""
        attributes = UserAttributes()
        if "gender" in options:
            attributes.gender = Gender(options["gender"])
        # facebookId, twitterId and location are validated but not forwarded

        with self._session.lock:
            config = self._config()
            if "requestUUID" in options:
                config.request_id = options["requestUUID"]
            config.user_attributes = attributes

    def snapshot(self) -> Optional[AttachParams]:
        """Build attach parameters from the current config, if any."""
        with self._session.lock:
            config = self._session.config
            if config is None:
                return None
            return AttachParams(
                api_key=config.api_key,
                placement=config.placement,
                padding=config.padding,
                release_mode=not config.developer_mode,
                offerwall_mode=config.offerwall_mode,
                reward_mode=config.reward_mode,
                callbacks=self._callbacks,
                request_uuid=config.request_id,
                user_attributes=config.user_attributes,
            )

    def process_request(self) -> bool:
        """
        Enqueue an attach call on the UI executor.

        Does nothing until init has registered a listener and load has run
        at least once.

        Returns:
            True if an attach call was enqueued
        """
        with self._session.lock:
            if self._session.listener is None or not self._session.loaded_once:
                return False
            params = self.snapshot()
            if params is None:
                return False
            custom_mode = self._session.config.custom_mode
            self._ui.submit(lambda: self._attach(params, custom_mode))
        return True

    def _attach(self, params: AttachParams, custom_mode: bool) -> None:
        logger.debug("Attaching SDK at %s (padding=%d)", params.placement.value, params.padding)
        self._sdk.init_with(params)

        # keep the SDK from presenting on its own
        if custom_mode:
            self._sdk.hide()
