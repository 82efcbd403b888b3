"""
⏱️ PollScheduler - fixed-interval poll cycles

Wires PollWorker -> PollChannel -> StateTracker:
- a consumer task applies every result delivered on the channel
- one cycle runs immediately on start, then one per interval
"""
import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from core.poll_channel import ChannelClosed, PollChannel
from core.settings import SettingsStore
from core.state_tracker import StateTracker
from twitchapi.channels import parse_channel_names

if TYPE_CHECKING:
    from twitchapi.monitors.poll_worker import PollWorker

LOGGER = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60


class PollScheduler:
    """
    Drives poll cycles without ever blocking on the network.

    Args:
        settings: SettingsStore (monitoring.* options)
        worker: PollWorker writing into `channel`
        tracker: StateTracker consuming `channel`
        channel: PollChannel shared by both sides
    """

    def __init__(
        self,
        settings: SettingsStore,
        worker: 'PollWorker',
        tracker: StateTracker,
        channel: PollChannel
    ):
        self.settings = settings
        self.worker = worker
        self.tracker = tracker
        self.channel = channel

        self.skipped = 0

        self._running = False
        self._timer_task: Optional[asyncio.Task] = None
        self._consumer_task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._running

    # Read on every use: reloaded monitoring.* values apply from the next tick
    @property
    def interval(self) -> float:
        return float(self.settings.get("monitoring.polling_interval", DEFAULT_INTERVAL))

    @property
    def skip_overlapping(self) -> bool:
        return bool(self.settings.get("monitoring.skip_overlapping", True))

    @property
    def prune(self) -> bool:
        return bool(self.settings.get("monitoring.prune_removed_channels", False))

    async def start(self):
        """Register the consumer, poll once, then arm the timer"""
        if self._running:
            LOGGER.warning("⚠️ PollScheduler already running")
            return

        self._running = True
        self._consumer_task = asyncio.create_task(self._consume_loop(), name="poll-consumer")
        self.fire()
        self._timer_task = asyncio.create_task(self._timer_loop(), name="poll-timer")
        LOGGER.info(f"✅ PollScheduler started (interval={self.interval}s)")

    async def stop(self):
        """Close the channel and cancel timer + consumer; in-flight workers are left alone"""
        if not self._running:
            return

        LOGGER.info("🛑 Stopping PollScheduler...")
        self._running = False
        self.channel.close()

        for task in (self._timer_task, self._consumer_task):
            if task:
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._timer_task = None
        self._consumer_task = None
        LOGGER.info("✅ PollScheduler stopped")

    def fire(self) -> Optional[asyncio.Task]:
        """Start a cycle unless one is still running and overlap is disabled"""
        if self.skip_overlapping and self.worker.in_flight:
            self.skipped += 1
            LOGGER.warning("⚠️ Previous poll cycle still running, skipping this tick")
            return None
        return self.worker.start()

    async def _timer_loop(self):
        while self._running:
            await asyncio.sleep(self.interval)
            self.fire()

    async def _consume_loop(self):
        while self._running:
            try:
                await self.tracker.consume(self.channel)
                if self.prune:
                    self.tracker.registry.prune(parse_channel_names(self.settings.snapshot().channels))
            except ChannelClosed:
                break
            except Exception as e:
                LOGGER.error(f"❌ Failed to apply poll result: {e}", exc_info=True)
