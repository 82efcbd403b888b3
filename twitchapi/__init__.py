"""
twitchapi/
==========

Everything Twitch-specific.

Organisation:
- channels.py : configured channel list parsing
- resolver.py : batched logins -> live channels resolution
- auth.py : OAuth token check
- transports/ : interchangeable Helix GET transports (httpx, curl)
- monitors/ : poll worker
"""

from twitchapi.channels import parse_channel_names
from twitchapi.resolver import LiveChannelResolver

__all__ = ["parse_channel_names", "LiveChannelResolver"]
