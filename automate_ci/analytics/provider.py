"""Host metadata supplied to the usage reporter."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class AnalyticsDataProvider(Protocol):
    """Source of host and plugin metadata for usage events.

    The host CI system implements this to tell the reporter where to keep its
    version state, what it is running inside, and whether the user has opted
    out of usage reporting.
    """

    @property
    def root_dir(self) -> Path:
        """Directory holding the persisted version state."""

    @property
    def application_name(self) -> str:
        """Name of the host CI application."""

    @property
    def application_version(self) -> str:
        """Version of the host CI application."""

    @property
    def plugin_name(self) -> str:
        """Name of the plugin sending events."""

    @property
    def plugin_version(self) -> str:
        """Version of the plugin sending events."""

    def is_enabled(self) -> bool:
        """Return whether the host currently allows usage reporting."""


@dataclass(frozen=True, kw_only=True)
class StaticDataProvider:
    """Data provider backed by fixed values."""

    root_dir: Path
    application_name: str
    application_version: str
    plugin_name: str
    plugin_version: str
    enabled: bool = True

    def is_enabled(self) -> bool:
        """Return the fixed enabled flag."""
        return self.enabled
