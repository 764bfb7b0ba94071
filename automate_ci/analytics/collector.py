"""Fire-and-forget delivery of hits to Google Analytics."""

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Protocol

import aiohttp

from automate_ci.analytics.hits import Hit

log = logging.getLogger(__name__)

PROTOCOL_VERSION = "1"


class HitCollector(Protocol):
    """Sink accepting hits without reporting the delivery outcome."""

    def post_async(self, hit: Hit) -> None:
        """Queue ``hit`` for delivery and return immediately."""


@dataclass(frozen=True, kw_only=True)
class GoogleAnalyticsClient:
    """Posts hits to the Measurement Protocol collect endpoint."""

    tracking_id: str
    collect_url: str = "https://www.google-analytics.com/collect"
    timeout: float = 10.0
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, repr=False)

    def post_async(self, hit: Hit) -> None:
        """Schedule delivery of ``hit`` without waiting for it.

        Inside a running event loop the delivery becomes a task on that loop;
        otherwise it runs on a short-lived daemon thread.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            threading.Thread(
                target=asyncio.run,
                args=(self.send(hit),),
                name="automate-analytics",
                daemon=True,
            ).start()
            return

        task = loop.create_task(self.send(hit))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def build_payload(self, hit: Hit) -> dict[str, str]:
        """Form fields for a single hit."""
        return {"v": PROTOCOL_VERSION, "tid": self.tracking_id, **hit.to_payload()}

    async def send(self, hit: Hit) -> None:
        """Deliver one hit, dropping it on any transport failure."""
        payload = self.build_payload(hit)
        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                async with session.post(self.collect_url, data=payload) as response:
                    if response.status >= 400:
                        log.debug(
                            "Analytics collector rejected hit t=%s: %s",
                            payload.get("t"),
                            response.status,
                        )
        except (aiohttp.ClientError, TimeoutError) as e:
            log.debug("Dropped analytics hit t=%s: %s", payload.get("t"), e)
