"""Usage hits sent to the analytics collector."""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Self

from pydantic import Field

from automate_ci.models.base import Model


class GlobalProperties(Model):
    """Dimensions attached to every hit regardless of its type."""

    client_id: str
    application_name: str
    application_version: str
    plugin_name: str
    plugin_version: str

    def to_payload(self) -> dict[str, str]:
        """Render as Measurement Protocol parameters."""
        return {
            "cid": self.client_id,
            "an": self.application_name,
            "aiid": self.application_version,
            "aid": self.plugin_name,
            "av": self.plugin_version,
        }


class Hit(Model):
    """Base for all hit types."""

    global_properties: GlobalProperties | None = None

    def with_globals(self, global_properties: GlobalProperties) -> Self:
        """Return a copy carrying the given global dimensions."""
        return self.model_copy(update={"global_properties": global_properties})

    @abstractmethod
    def hit_parameters(self) -> dict[str, str]:
        """Parameters specific to this hit type."""

    def to_payload(self) -> dict[str, str]:
        """Render the hit as Measurement Protocol form fields."""
        payload = self.hit_parameters()
        if self.global_properties is not None:
            payload.update(self.global_properties.to_payload())
        return payload


class EventHit(Hit):
    """A categorised user action."""

    category: str
    action: str
    custom_dimensions: Mapping[int, str] = Field(default_factory=dict)

    def hit_parameters(self) -> dict[str, str]:
        """Event category, action and custom dimensions."""
        parameters = {"t": "event", "ec": self.category, "ea": self.action}
        for index, value in sorted(self.custom_dimensions.items()):
            parameters[f"cd{index}"] = value
        return parameters


class TimingHit(Hit):
    """A user timing measurement in milliseconds."""

    category: str
    variable: str
    time_ms: int

    def hit_parameters(self) -> dict[str, str]:
        """Timing category, variable name and duration."""
        return {
            "t": "timing",
            "utc": self.category,
            "utv": self.variable,
            "utt": str(self.time_ms),
        }
