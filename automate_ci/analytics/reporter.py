"""Best-effort usage reporting for the plugin."""

import logging

from automate_ci.analytics.collector import GoogleAnalyticsClient, HitCollector
from automate_ci.analytics.config import AnalyticsConfig, load_tracking_id
from automate_ci.analytics.hits import EventHit, GlobalProperties, Hit, TimingHit
from automate_ci.analytics.provider import AnalyticsDataProvider
from automate_ci.analytics.version import (
    VersionStateError,
    VersionTracker,
    VersionTransition,
)

log = logging.getLogger(__name__)

DEFAULT_CLIENT_ID = "unknown-client"


class UsageReporter:
    """Sends install, build and report usage events to the collector.

    Nothing here may fail the host build: persistence problems are logged and
    delivery is never awaited. Events are only sent while the reporter is
    enabled, the data provider allows it and a collector is configured.
    """

    def __init__(
        self,
        data_provider: AnalyticsDataProvider,
        config: AnalyticsConfig | None = None,
        *,
        collector: HitCollector | None = None,
        version_tracker: VersionTracker | None = None,
    ) -> None:
        self.data_provider = data_provider
        self.config = config or AnalyticsConfig()
        self.version_tracker = version_tracker or VersionTracker(
            root_dir=data_provider.root_dir
        )
        self.enabled = self.config.enabled
        self.collector = collector if collector is not None else self._build_collector()
        self.client_id: str | None = None

        self.track_install()

    def _build_collector(self) -> HitCollector | None:
        path = self.config.plugin_properties
        try:
            tracking_id = load_tracking_id(path)
        except OSError as e:
            log.debug("Usage reporting disabled, cannot read %s: %s", path, e)
            self.enabled = False
            return None

        if tracking_id is None:
            log.debug("Usage reporting disabled, no tracking id in %s", path)
            return None

        return GoogleAnalyticsClient(
            tracking_id=tracking_id,
            collect_url=self.config.collect_url,
            timeout=self.config.timeout,
        )

    @property
    def is_active(self) -> bool:
        """Whether hits are currently forwarded to the collector."""
        return (
            self.enabled
            and self.data_provider.is_enabled()
            and self.collector is not None
        )

    def get_client_id(self) -> str:
        """Return the persisted client id, or a placeholder if unreadable."""
        try:
            return self.version_tracker.get_client_id()
        except VersionStateError:
            return DEFAULT_CLIENT_ID

    def global_properties(self) -> GlobalProperties:
        """Dimensions attached to every outgoing hit."""
        return GlobalProperties(
            client_id=self.client_id or self.get_client_id(),
            application_name=self.data_provider.application_name,
            application_version=self.data_provider.application_version,
            plugin_name=self.data_provider.plugin_name,
            plugin_version=self.data_provider.plugin_version,
        )

    def post_async(self, hit: Hit) -> None:
        """Forward ``hit`` with global dimensions if reporting is active."""
        if self.is_active and self.collector is not None:
            self.collector.post_async(hit.with_globals(self.global_properties()))

    def track_install(self) -> VersionTransition | None:
        """Record the running plugin version and report installs and upgrades.

        Returns:
            The observed transition, or None if the version state was unusable

        """
        version = self.data_provider.plugin_version
        try:
            if self.version_tracker.init(version):
                transition = VersionTransition.NO_PRIOR_STATE
            elif self.version_tracker.update_version(version):
                transition = VersionTransition.VERSION_CHANGED
            else:
                transition = VersionTransition.SAME_VERSION
        except VersionStateError as e:
            log.warning("Failed to track install: %s", e)
            return None
        finally:
            self.client_id = self.get_client_id()

        if transition is VersionTransition.NO_PRIOR_STATE:
            self.post_async(EventHit(category="install", action="install"))
        elif transition is VersionTransition.VERSION_CHANGED:
            self.post_async(EventHit(category="install", action="update"))
        return transition

    def track_build_run(
        self, local_enabled: bool, local_path_set: bool, local_options_set: bool
    ) -> None:
        """Report a build run and how the local tunnel was configured."""
        custom_dimensions: dict[int, str] = {}
        if local_path_set:
            custom_dimensions[1] = "withLocalPath"
        else:
            custom_dimensions[2] = "withoutLocalPath"

        if local_options_set:
            custom_dimensions[3] = "withLocalOptions"
        else:
            custom_dimensions[4] = "withoutLocalOptions"

        self.post_async(
            EventHit(
                category="withLocal" if local_enabled else "withoutLocal",
                action="buildRun",
                custom_dimensions=custom_dimensions,
            )
        )

    def track_report_view(self) -> None:
        """Report that the session report was opened in a separate tab."""
        self.post_async(EventHit(category="report", action="separateTab"))

    def track_reporting_event(self, is_report_embedded: bool) -> None:
        """Report whether the session report was embedded in the build page."""
        action = "reportEmbedded" if is_report_embedded else "reportNotEmbedded"
        self.post_async(EventHit(category="reporting", action=action))

    def track_iframe_request(self) -> None:
        self.post_async(EventHit(category="iframeRequested", action="iframe"))

    def track_iframe_load(self, load_time_ms: int) -> None:
        self.post_async(
            TimingHit(
                category="iframeLoadTimeMs", variable="iframe", time_ms=load_time_ms
            )
        )


def create_usage_reporter(
    data_provider: AnalyticsDataProvider,
    config: AnalyticsConfig | None = None,
) -> UsageReporter:
    """Create a usage reporter; callers keep and pass around the returned handle."""
    return UsageReporter(data_provider, config)
