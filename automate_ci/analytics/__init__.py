"""Usage analytics for the plugin."""

from automate_ci.analytics.collector import GoogleAnalyticsClient, HitCollector
from automate_ci.analytics.config import AnalyticsConfig
from automate_ci.analytics.hits import EventHit, GlobalProperties, TimingHit
from automate_ci.analytics.provider import AnalyticsDataProvider, StaticDataProvider
from automate_ci.analytics.reporter import UsageReporter, create_usage_reporter
from automate_ci.analytics.version import (
    VersionStateError,
    VersionTracker,
    VersionTransition,
)

__all__ = [
    "AnalyticsConfig",
    "AnalyticsDataProvider",
    "EventHit",
    "GlobalProperties",
    "GoogleAnalyticsClient",
    "HitCollector",
    "StaticDataProvider",
    "TimingHit",
    "UsageReporter",
    "VersionStateError",
    "VersionTracker",
    "VersionTransition",
    "create_usage_reporter",
]
