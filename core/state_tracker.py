"""
📊 StateTracker - mark-and-sweep diff of live snapshots

For each delivered result:
1. mark: every ONLINE channel becomes WASONLINE
2. sweep-in: each received name becomes ONLINE; "online" is emitted unless
   it was WASONLINE
3. sweep-out: every channel still WASONLINE becomes OFFLINE and "offline"
   is emitted

Steady state therefore emits nothing, and each genuine transition emits once.
"""
import asyncio
import logging
from typing import Iterable, List, Optional

from core.message_bus import MessageBus
from core.message_types import SystemEvent, Transition
from core.poll_channel import END_MARKER, ChannelClosed, PollChannel
from core.registry import ChannelRegistry, ChannelState

LOGGER = logging.getLogger(__name__)


class StateTracker:
    """
    Owns the ChannelRegistry and turns poll results into transitions.

    Args:
        bus: MessageBus receiving stream.online / stream.offline system events
        registry: Registry to update (a fresh one by default)
    """

    def __init__(self, bus: Optional[MessageBus] = None, registry: Optional[ChannelRegistry] = None):
        self.bus = bus
        self.registry = registry if registry is not None else ChannelRegistry()
        self.cycles = 0

    def mark(self):
        for channel in self.registry.channels_in(ChannelState.ONLINE):
            self.registry.set(channel, ChannelState.WASONLINE)

    def sweep_in(self, channel: str) -> Optional[Transition]:
        channel = channel.strip().lower()
        if not channel:
            return None
        previous = self.registry.get(channel)
        self.registry.set(channel, ChannelState.ONLINE)
        # WASONLINE: still live. ONLINE: listed twice in this result.
        if previous is not ChannelState.OFFLINE:
            return None
        return Transition(channel, online=True)

    def sweep_out(self) -> List[Transition]:
        transitions = []
        for channel in self.registry.channels_in(ChannelState.WASONLINE):
            self.registry.set(channel, ChannelState.OFFLINE)
            transitions.append(Transition(channel, online=False))
        return transitions

    @staticmethod
    def _collect(transition: Optional[Transition], transitions: List[Transition]):
        if transition:
            transitions.append(transition)

    def apply_result(self, names: Iterable[str]) -> List[Transition]:
        """Run one full mark / sweep-in / sweep-out pass over `names`"""
        self.mark()
        transitions = []
        for name in names:
            self._collect(self.sweep_in(name), transitions)
        transitions.extend(self.sweep_out())
        self.cycles += 1
        return transitions

    async def consume(self, channel: PollChannel) -> List[Transition]:
        """
        Read one result from `channel` (up to END_MARKER) and apply it.

        Blocks until the first line of the result arrives; the registry is
        only marked once data is available.

        Args:
            channel: PollChannel fed by PollWorker
        """
        first = await channel.readline()
        before = self.registry.snapshot()
        self.mark()
        transitions = []
        try:
            if first != END_MARKER:
                self._collect(self.sweep_in(first), transitions)
                async for name in channel.lines():
                    self._collect(self.sweep_in(name), transitions)
        except (ChannelClosed, asyncio.CancelledError):
            # Interrupted before END_MARKER: drop the partial result
            self.registry.restore(before)
            raise
        transitions.extend(self.sweep_out())
        self.cycles += 1

        await self.notify(transitions)
        return transitions

    async def notify(self, transitions: List[Transition]):
        for transition in transitions:
            if transition.online:
                LOGGER.info(f"🔴 {transition.channel}: STREAM ONLINE")
            else:
                LOGGER.info(f"💤 {transition.channel}: STREAM OFFLINE")
            if self.bus:
                await self.bus.publish("system.event", SystemEvent(
                    kind=transition.kind,
                    payload={
                        "channel": transition.channel,
                        "url": transition.url,
                        "source": "poll",
                    }
                ))
