"""Host app metadata used for the init version log line."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

PLUGIN_NAME = "plugin.pollfish"
PLUGIN_VERSION = "1.2.0"
GOOGLE_SDK_VERSION = "6.4.0 for Google Play"
UNIVERSAL_SDK_VERSION = "6.4.0 Universal"

TARGET_STORE_KEY = "targetedAppStore"


class AppMetadata(ABC):
    """Read-only access to the host app's metadata entries."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """
        Look up a metadata entry.

        Args:
            name: Entry name (e.g. 'targetedAppStore')

        Returns:
            The value, or None if the app does not declare it
        """
        pass


class StaticAppMetadata(AppMetadata):
    """Metadata backed by a plain mapping."""

    def __init__(self, values: Optional[Dict[str, str]] = None) -> None:
        self._values = dict(values or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)


def sdk_version_for(metadata: AppMetadata) -> str:
    """Pick the SDK variant string for the store the app targets."""
    target_store = metadata.get(TARGET_STORE_KEY) or ""
    if target_store.startswith("google"):
        return GOOGLE_SDK_VERSION
    return UNIVERSAL_SDK_VERSION


def version_line(metadata: AppMetadata) -> str:
    return f"{PLUGIN_NAME}: {PLUGIN_VERSION} (SDK: {sdk_version_for(metadata)})"
