"""
📦 Message Types - DTOs exchanged on the MessageBus
"""
import time
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class SystemEvent:
    """System event (stream.online, stream.offline, poll.warning, ...)"""
    kind: str                       # Type: "stream.online", "stream.offline", ...
    payload: Dict[str, Any]         # Event data
    timestamp: float = 0.0          # Timestamp

    def __post_init__(self):
        if self.timestamp == 0.0:
            self.timestamp = time.time()


@dataclass(frozen=True)
class Transition:
    """One online/offline transition emitted by the StateTracker"""
    channel: str                    # Normalized channel login
    online: bool                    # True = went live, False = went offline

    @property
    def kind(self) -> str:
        return "stream.online" if self.online else "stream.offline"

    @property
    def url(self) -> str:
        return channel_url(self.channel)


@dataclass
class PollStats:
    """Counters for one poll cycle (logged by the worker)"""
    names: int = 0
    id_requests: int = 0
    stream_requests: int = 0
    failed_chunks: int = 0
    live: int = 0


def channel_url(channel: str) -> str:
    return f"https://twitch.tv/{channel}"
