"""
🗂️ Registry - Per-channel live state

Maps a normalized channel name to its ChannelState.
Only the StateTracker mutates it, one complete poll result at a time.
"""
import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

LOGGER = logging.getLogger(__name__)


class ChannelState(Enum):
    """Live state of a watched channel"""
    OFFLINE = 0
    ONLINE = 1
    WASONLINE = 2   # Transient, only between mark and sweep-out


class ChannelRegistry:
    """Channel name -> ChannelState (unseen channels are implicitly OFFLINE)"""

    def __init__(self):
        self._states: Dict[str, ChannelState] = {}

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def get(self, name: str) -> ChannelState:
        return self._states.get(self._key(name), ChannelState.OFFLINE)

    def set(self, name: str, state: ChannelState):
        self._states[self._key(name)] = state

    def is_online(self, name: str) -> bool:
        return self.get(name) is ChannelState.ONLINE

    def known(self, name: str) -> bool:
        """True if the channel was ever observed live"""
        return self._key(name) in self._states

    def channels_in(self, state: ChannelState) -> List[str]:
        """Channels currently in `state`, in insertion order"""
        return [name for name, s in self._states.items() if s is state]

    def online(self) -> List[str]:
        return self.channels_in(ChannelState.ONLINE)

    def prune(self, keep: Iterable[str]) -> List[str]:
        """
        Drop OFFLINE entries whose channel is not in `keep`.

        Returns:
            The removed channel names
        """
        wanted = {self._key(name) for name in keep}
        removed = [
            name for name, state in self._states.items()
            if state is ChannelState.OFFLINE and name not in wanted
        ]
        for name in removed:
            del self._states[name]
        if removed:
            LOGGER.info(f"🧹 Pruned {len(removed)} stale channel(s): {', '.join(removed)}")
        return removed

    def snapshot(self) -> Dict[str, ChannelState]:
        return self._states.copy()

    def restore(self, states: Dict[str, ChannelState]):
        """Replace all entries with a previous snapshot()"""
        self._states = dict(states)

    def get_state(self, name: str) -> Optional[ChannelState]:
        """Stored state, or None if the channel was never seen"""
        return self._states.get(self._key(name))

    def __contains__(self, name: str) -> bool:
        return self.known(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._states))

    def __len__(self) -> int:
        return len(self._states)
