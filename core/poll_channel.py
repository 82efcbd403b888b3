"""
📨 PollChannel - one-way stream from poll workers to the state tracker

Each result travels as one item per live channel name followed by END_MARKER.
Writers hold a lock for a whole result, so results never interleave.
"""
import asyncio
import logging
from typing import AsyncIterator, Iterable

LOGGER = logging.getLogger(__name__)

END_MARKER = "+"


class ChannelClosed(Exception):
    """Raised to readers once the channel is closed and drained"""


class PollChannel:
    """Bounded, line-oriented queue between PollWorker and StateTracker"""

    def __init__(self, maxsize: int = 1000):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._write_lock = asyncio.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send_result(self, names: Iterable[str]) -> bool:
        """
        Write one complete result (names then END_MARKER).

        Returns:
            False if the channel was closed before the result was fully written
        """
        async with self._write_lock:
            for name in names:
                if not await self._put(name):
                    return False
            return await self._put(END_MARKER)

    async def _put(self, line: str) -> bool:
        if self._closed:
            LOGGER.warning("⚠️ Error writing to poll channel: channel is closed")
            return False
        await self._queue.put(line)
        return True

    async def readline(self) -> str:
        """Next line; raises ChannelClosed once closed and empty"""
        if self._closed and self._queue.empty():
            raise ChannelClosed()
        return await self._queue.get()

    async def lines(self) -> AsyncIterator[str]:
        """Lines of the next result, END_MARKER excluded"""
        while True:
            line = await self.readline()
            if line == END_MARKER:
                return
            yield line

    def pending(self) -> int:
        return self._queue.qsize()

    def close(self):
        """Stop accepting writes; buffered lines are dropped"""
        if self._closed:
            LOGGER.warning("⚠️ Error closing poll channel: already closed")
            return
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        LOGGER.debug("📪 Poll channel closed")
