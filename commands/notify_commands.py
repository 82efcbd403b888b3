"""
🎯 Notify commands

/twitch_online        list configured channels currently live
/twitch_set key value change a twitch.* setting (applies next cycle)
/twitch_reload        re-read config.yaml
"""
import logging
from typing import List

import yaml

from core.command_router import CommandRouter
from core.message_types import channel_url
from core.registry import ChannelRegistry
from core.settings import SettingsStore
from core.surfaces import Surfaces
from twitchapi.channels import parse_channel_names

LOGGER = logging.getLogger(__name__)


class NotifyCommands:
    """Console commands exposed by the notifier"""

    def __init__(self, settings: SettingsStore, registry: ChannelRegistry, surfaces: Surfaces):
        self.settings = settings
        self.registry = registry
        self.surfaces = surfaces

    def register(self, router: CommandRouter):
        router.register_command("twitch_online", self.online_command)
        router.register_command("twitch_set", self.set_command)
        router.register_command("twitch_reload", self.reload_command)

    def unregister(self, router: CommandRouter):
        for name in ("twitch_online", "twitch_set", "twitch_reload"):
            router.unregister_command(name)

    def online_channels(self) -> List[str]:
        """Configured channels whose state is ONLINE, in configured order"""
        configured = parse_channel_names(self.settings.snapshot().channels)
        return [chan for chan in configured if self.registry.is_online(chan)]

    async def online_command(self, args: List[str]):
        """📺 List live channels"""
        self.surfaces.msg("The following channels are online:")
        for chan in self.online_channels():
            self.surfaces.msg(f"* {channel_url(chan)}")

    async def set_command(self, args: List[str]):
        """⚙️ /twitch_set channels a b c"""
        if len(args) < 1:
            self.surfaces.warn("Usage: /twitch_set <channels|client_id|oauth> <value>")
            return
        key, value = args[0], " ".join(args[1:])
        if key not in ("channels", "client_id", "oauth"):
            self.surfaces.warn(f"Unknown setting: {key}")
            return
        self.settings.set(key, value)
        self.surfaces.msg(f"twitch.{key} updated")

    async def reload_command(self, args: List[str]):
        """🔄 Reload settings from disk"""
        try:
            self.settings.reload()
        except (OSError, yaml.YAMLError) as e:
            self.surfaces.warn(f"Could not reload settings: {e}")
            return
        self.surfaces.msg("Settings reloaded")
