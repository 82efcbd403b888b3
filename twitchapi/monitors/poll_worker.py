#!/usr/bin/env python3
"""
📡 Poll Worker - one isolated live-status resolution per call

start() returns immediately; the cycle runs as its own task, performs all
Helix calls, then writes the live channel names and the end marker to the
PollChannel. Failures stay inside the task.
"""
import asyncio
import logging
from typing import Callable, List, Optional

from core.message_bus import MessageBus
from core.message_types import SystemEvent
from core.poll_channel import PollChannel
from core.settings import SettingsStore
from twitchapi.channels import parse_channel_names
from twitchapi.resolver import LiveChannelResolver
from twitchapi.transports import select_transport

LOGGER = logging.getLogger(__name__)


class PollWorker:
    """
    Runs poll cycles off the caller's control path.

    Args:
        settings: SettingsStore (snapshotted once per cycle)
        channel: PollChannel the results are written to
        bus: Optional MessageBus for poll.warning events
        transport_factory: (config, mode, timeout) -> HelixTransport
    """

    def __init__(
        self,
        settings: SettingsStore,
        channel: PollChannel,
        bus: Optional[MessageBus] = None,
        transport_factory: Optional[Callable] = None
    ):
        self.settings = settings
        self.channel = channel
        self.bus = bus
        self.transport_factory = transport_factory or select_transport
        self._task: Optional[asyncio.Task] = None
        self.cycles_started = 0

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Launch one cycle and return its task without waiting for it"""
        self.cycles_started += 1
        self._task = asyncio.create_task(
            self.run_cycle(), name=f"poll-cycle-{self.cycles_started}"
        )
        self._task.add_done_callback(self._reap)
        return self._task

    def _reap(self, task: asyncio.Task):
        if task.cancelled():
            LOGGER.debug(f"🛑 {task.get_name()} cancelled")
            return
        error = task.exception()
        if error:
            LOGGER.error(f"❌ {task.get_name()} crashed: {error}")

    async def run_cycle(self) -> Optional[List[str]]:
        """
        Resolve and write one result.

        Returns:
            The live channel names written, or None if the cycle failed
        """
        config = self.settings.snapshot()
        monitoring = self.settings.section("monitoring")
        names = parse_channel_names(config.channels)

        try:
            transport = self.transport_factory(
                config,
                monitoring.get("transport", "auto"),
                float(monitoring.get("helix_timeout", 10.0)),
            )
            try:
                resolver = LiveChannelResolver(transport)
                live = await resolver.live_channels(names)
            finally:
                await transport.close()
        except Exception as e:
            LOGGER.error(f"❌ Poll cycle failed: {e}", exc_info=True)
            return None

        stats = resolver.stats
        LOGGER.info(
            f"📡 Poll cycle: {stats.live}/{len(names)} live "
            f"({stats.id_requests} users + {stats.stream_requests} streams requests, "
            f"{stats.failed_chunks} failed)"
        )

        if not await self.channel.send_result(live):
            await self._warn("Error writing to poll channel: channel is closed")
        return live

    async def _warn(self, message: str):
        if self.bus:
            await self.bus.publish("system.event", SystemEvent(
                kind="poll.warning",
                payload={"message": message}
            ))
