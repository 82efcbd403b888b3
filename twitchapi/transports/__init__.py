"""
twitchapi/transports/
=====================

Interchangeable Helix GET transports.

Modules:
- helix_http : httpx client (default when TLS is available)
- helix_curl : curl subprocess (fallback without TLS)
"""

import importlib.util
import logging

from core.settings import NotifyConfig
from twitchapi.transports.base import HelixTransport, TransportError
from twitchapi.transports.helix_curl import CurlHelixTransport
from twitchapi.transports.helix_http import HttpxHelixTransport

LOGGER = logging.getLogger(__name__)

TRANSPORT_MODES = ("auto", "http", "curl")


def can_ssl() -> bool:
    """True if this interpreter can speak TLS natively"""
    return importlib.util.find_spec("ssl") is not None


def select_transport(config: NotifyConfig, mode: str = "auto", timeout: float = 10.0) -> HelixTransport:
    """
    Build the transport for one poll cycle.

    Args:
        config: Settings snapshot (client id + bearer token)
        mode: "auto" (http if TLS is available, else curl), "http" or "curl"
        timeout: Per-request timeout in seconds
    """
    if mode not in TRANSPORT_MODES:
        LOGGER.warning(f"⚠️ Unknown transport '{mode}', falling back to auto")
        mode = "auto"
    if mode == "curl" or (mode == "auto" and not can_ssl()):
        return CurlHelixTransport(config, timeout=timeout)
    return HttpxHelixTransport(config, timeout=timeout)


__all__ = [
    "HelixTransport",
    "TransportError",
    "HttpxHelixTransport",
    "CurlHelixTransport",
    "can_ssl",
    "select_transport",
]
