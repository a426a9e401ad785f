# services/sauce_client/app/broadcaster.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List

from core.models import Sauce

logger = logging.getLogger("Piquante_Core").getChild("SauceClient").getChild("Broadcaster")

SnapshotCallback = Callable[[List[Sauce]], None]


class Subscription:
    """Handle returned by SauceBroadcaster.subscribe(); detach with unsubscribe()."""
    def __init__(self, broadcaster: "SauceBroadcaster", callback: SnapshotCallback):
        self._broadcaster = broadcaster
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._broadcaster._remove(self._callback)
            self.active = False


class SauceBroadcaster:
    """
    Hot multicast channel for sauce list snapshots.

    Nothing is retained between emissions: a subscriber only receives
    snapshots published after it attached, and a publish with no subscribers
    is simply dropped.
    """

    def __init__(self):
        self._callbacks: List[SnapshotCallback] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        self._callbacks.append(callback)
        logger.debug(f"Subscriber attached ({len(self._callbacks)} active).")
        return Subscription(self, callback)

    def _remove(self, callback: SnapshotCallback) -> None:
        try:
            self._callbacks.remove(callback)
        except ValueError:
            return
        logger.debug(f"Subscriber detached ({len(self._callbacks)} active).")

    def publish(self, sauces: List[Sauce]) -> None:
        """Pushes a snapshot to every attached subscriber, each getting its own list."""
        logger.debug(f"Publishing snapshot of {len(sauces)} sauce(s) to {len(self._callbacks)} subscriber(s).")
        # Copy so a subscriber unsubscribing mid-delivery doesn't skip its neighbour
        for callback in list(self._callbacks):
            try:
                callback(list(sauces))
            except Exception as e:
                logger.error(f"Sauce subscriber {callback!r} raised while handling a snapshot: {e}", exc_info=True)

    @asynccontextmanager
    async def stream(self) -> AsyncIterator[AsyncIterator[List[Sauce]]]:
        """
        Attaches a queue-backed subscriber for the duration of the block.

        Usage:
            async with broadcaster.stream() as snapshots:
                async for sauces in snapshots:
                    ...
        """
        queue: "asyncio.Queue[List[Sauce]]" = asyncio.Queue()
        subscription = self.subscribe(queue.put_nowait)

        async def _iterate() -> AsyncIterator[List[Sauce]]:
            while True:
                yield await queue.get()

        try:
            yield _iterate()
        finally:
            subscription.unsubscribe()
