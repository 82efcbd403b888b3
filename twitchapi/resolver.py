"""
Live channel resolution.

Two chained Helix lookups, each chunked to the API's per-request limit:

    logins --(users?login=...)--> user ids --(streams?user_id=...)--> live logins

A failed chunk contributes nothing and never aborts the other chunks.
"""
import logging
from typing import Iterator, List, Optional, Sequence

from core.message_types import PollStats
from twitchapi.transports.base import HelixTransport, TransportError

LOGGER = logging.getLogger(__name__)

MAX_LOGINS_PER_REQUEST = 100
MAX_USER_IDS_PER_REQUEST = 100

# Response shape errors are handled like transport errors
DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def chunked(items: Sequence[str], size: int) -> Iterator[List[str]]:
    """Split `items` into consecutive lists of at most `size` elements"""
    if size < 1:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


class LiveChannelResolver:
    """
    Resolves channel logins to the subset currently streaming.

    Args:
        transport: Helix transport used for both stages
    """

    def __init__(
        self,
        transport: HelixTransport,
        max_logins: int = MAX_LOGINS_PER_REQUEST,
        max_user_ids: int = MAX_USER_IDS_PER_REQUEST
    ):
        self.transport = transport
        self.max_logins = max_logins
        self.max_user_ids = max_user_ids
        self.stats = PollStats()

    async def live_channels(self, names: Sequence[str]) -> List[str]:
        """Lowercased logins of the live channels among `names`"""
        self.stats = PollStats(names=len(names))

        user_ids: List[str] = []
        for chunk in chunked(names, self.max_logins):
            user_ids.extend(await self._resolve_user_ids(chunk))

        live: List[str] = []
        for chunk in chunked(user_ids, self.max_user_ids):
            live.extend(await self._resolve_live_logins(chunk))

        self.stats.live = len(live)
        LOGGER.debug(
            f"📡 Resolved {len(names)} names -> {len(user_ids)} ids -> {len(live)} live "
            f"({self.stats.failed_chunks} failed chunk(s))"
        )
        return live

    async def _resolve_user_ids(self, logins: List[str]) -> List[str]:
        self.stats.id_requests += 1
        body = await self._fetch("users", {"login": logins})
        if body is None:
            return []
        try:
            return [str(user["id"]) for user in body["data"]]
        except DECODE_ERRORS as e:
            self._chunk_failed("users", len(logins), e)
            return []

    async def _resolve_live_logins(self, user_ids: List[str]) -> List[str]:
        self.stats.stream_requests += 1
        body = await self._fetch("streams", {"user_id": user_ids})
        if body is None:
            return []
        try:
            return [stream["user_login"].lower() for stream in body["data"]]
        except DECODE_ERRORS as e:
            self._chunk_failed("streams", len(user_ids), e)
            return []

    async def _fetch(self, resource: str, params: dict) -> Optional[dict]:
        size = len(next(iter(params.values())))
        try:
            return await self.transport.get(resource, params)
        except TransportError as e:
            self._chunk_failed(resource, size, e)
            return None

    def _chunk_failed(self, resource: str, size: int, error: Exception):
        self.stats.failed_chunks += 1
        LOGGER.warning(f"⚠️ Helix {resource} chunk ({size} entries) dropped: {error}")
