"""In-memory test doubles."""

from dataclasses import dataclass, field

from automate_ci.analytics.hits import EventHit, Hit


@dataclass
class RecordingCollector:
    """Collector that keeps every posted hit for assertions."""

    hits: list[Hit] = field(default_factory=list)

    def post_async(self, hit: Hit) -> None:
        """Record the hit instead of sending it."""
        self.hits.append(hit)

    def events(self) -> list[tuple[str, str]]:
        """Category and action of every recorded event hit."""
        return [
            (hit.category, hit.action) for hit in self.hits if isinstance(hit, EventHit)
        ]
