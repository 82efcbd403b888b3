"""
⚙️ Settings - YAML configuration and per-cycle snapshots

config.yaml layout:

    twitch:
      channels: "channel1 channel2 channel3"
      client_id: "..."
      oauth: "..."
    monitoring:
      polling_interval: 60
      transport: auto          # auto | http | curl
      skip_overlapping: true
      prune_removed_channels: false
"""
import copy
import logging
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

LOGGER = logging.getLogger(__name__)

# Client ID of the Twitch Chat OAuth Password Generator (https://twitchapps.com/tmi/)
DEFAULT_CLIENT_ID = "q6batx0epp608isickayubi39itsckt"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "twitch": {
        "channels": "",
        "client_id": DEFAULT_CLIENT_ID,
        "oauth": "",
    },
    "monitoring": {
        "polling_interval": 60,
        "transport": "auto",
        "helix_timeout": 10.0,
        "skip_overlapping": True,
        "prune_removed_channels": False,
        "queue_size": 1000,
    },
}


def load_config(config_path='config/config.yaml') -> Dict[str, Any]:
    """Load config.yaml"""
    config_file = pathlib.Path(config_path)
    if not config_file.exists():
        LOGGER.error(f"Config file {config_path} not found")
        raise FileNotFoundError(config_path)
    with open(config_file, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def clean_token(token: Optional[str]) -> str:
    """Strip the 'oauth:' prefix handed out by chat token generators"""
    token = (token or "").strip()
    if token.startswith("oauth:"):
        token = token[len("oauth:"):]
    return token


@dataclass(frozen=True)
class NotifyConfig:
    """Immutable view of the settings a poll cycle needs"""
    channels: str
    client_id: str
    oauth: str


class SettingsStore:
    """
    Holds the loaded configuration merged over DEFAULTS.

    The worker calls snapshot() once per cycle; runtime changes made with
    set() apply from the next cycle on.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, path: Optional[str] = None):
        self.path = path
        self._config = self._merge(config or {})

    @classmethod
    def from_file(cls, path: str) -> "SettingsStore":
        return cls(load_config(path), path=path)

    @staticmethod
    def _merge(config: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
        merged = copy.deepcopy(DEFAULTS)
        for section, values in config.items():
            if isinstance(values, dict):
                merged.setdefault(section, {}).update(values)
            else:
                merged[section] = values
        return merged

    def reload(self):
        """Re-read the config file (no-op for in-memory stores)"""
        if not self.path:
            return
        self._config = self._merge(load_config(self.path))
        LOGGER.info(f"🔄 Settings reloaded from {self.path}")

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup: get("monitoring.polling_interval")"""
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any):
        """Dotted update; a bare key targets the twitch section"""
        if "." not in key:
            key = f"twitch.{key}"
        section, _, name = key.rpartition(".")
        node = self._config
        for part in section.split("."):
            node = node.setdefault(part, {})
        node[name] = value
        LOGGER.info(f"⚙️ Setting updated: {key}")

    def section(self, name: str) -> Dict[str, Any]:
        return dict(self._config.get(name) or {})

    def snapshot(self) -> NotifyConfig:
        twitch = self._config.get("twitch") or {}
        channels = twitch.get("channels") or ""
        if not isinstance(channels, str):
            channels = " ".join(str(c) for c in channels)
        return NotifyConfig(
            channels=channels,
            client_id=str(twitch.get("client_id") or DEFAULT_CLIENT_ID),
            oauth=clean_token(twitch.get("oauth")),
        )
