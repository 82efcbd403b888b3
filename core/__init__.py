"""
Core - poll engine and host-side plumbing
"""

from core.message_bus import MessageBus
from core.poll_channel import END_MARKER, PollChannel
from core.registry import ChannelRegistry, ChannelState
from core.state_tracker import StateTracker

__all__ = [
    "MessageBus",
    "END_MARKER",
    "PollChannel",
    "ChannelRegistry",
    "ChannelState",
    "StateTracker",
]
