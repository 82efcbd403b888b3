#!/usr/bin/env python3
"""
📢 Stream Announcer - prints stream online/offline to the status surface

Subscribes to system.event (stream.online / stream.offline / poll.warning)
on the MessageBus.
"""
import logging
from typing import Dict, Optional

from core.message_bus import MessageBus
from core.message_types import SystemEvent, channel_url
from core.surfaces import Surfaces

LOGGER = logging.getLogger(__name__)

DEFAULT_ONLINE_MESSAGE = "{url} is now online."
DEFAULT_OFFLINE_MESSAGE = "{url} is now offline."


class StreamAnnouncer:
    """
    Turns system events into surface messages.

    Args:
        bus: MessageBus to subscribe to
        surfaces: Status + active surfaces
        config: Optional "announcements" settings (message templates)
    """

    def __init__(self, bus: MessageBus, surfaces: Surfaces, config: Optional[Dict] = None):
        self.bus = bus
        self.surfaces = surfaces
        announcements = (config or {}).get("announcements", {})

        self.online_message = announcements.get("stream_online", {}).get("message", DEFAULT_ONLINE_MESSAGE)
        self.offline_message = announcements.get("stream_offline", {}).get("message", DEFAULT_OFFLINE_MESSAGE)

        self.bus.subscribe("system.event", self._handle_system_event)

    def close(self):
        self.bus.unsubscribe("system.event", self._handle_system_event)

    async def _handle_system_event(self, event: SystemEvent):
        if event.kind == "stream.online":
            self.surfaces.notify(self._format(self.online_message, event, DEFAULT_ONLINE_MESSAGE))
        elif event.kind == "stream.offline":
            self.surfaces.notify(self._format(self.offline_message, event, DEFAULT_OFFLINE_MESSAGE))
        elif event.kind == "poll.warning":
            self.surfaces.warn(event.payload.get("message", "poll warning"))

    def _format(self, template: str, event: SystemEvent, fallback: str) -> str:
        channel = event.payload.get("channel", "")
        fields = {"channel": channel, "url": event.payload.get("url") or channel_url(channel)}
        try:
            return template.format(**fields)
        except (KeyError, IndexError) as e:
            LOGGER.error(f"❌ Error formatting announcement: {e}")
            return fallback.format(**fields)
