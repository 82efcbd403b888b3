"""Helix transport contract.

A transport performs one authenticated GET against a Helix resource and
returns the decoded JSON body. Any failure is raised as TransportError.
"""

import abc
import logging
from typing import Dict, List, Union

from twitchAPI.helper import TWITCH_API_BASE_URL, build_url

from core.settings import NotifyConfig

LOGGER = logging.getLogger(__name__)

QueryParams = Dict[str, Union[str, List[str]]]


class TransportError(Exception):
    """Network, process or decode failure for a single Helix call"""


class HelixTransport(abc.ABC):
    """Base class for Helix GET transports"""

    name = "base"

    def __init__(self, config: NotifyConfig, timeout: float = 10.0):
        self.client_id = config.client_id
        self.oauth = config.oauth
        self.timeout = timeout

    def url_for(self, resource: str, params: QueryParams) -> str:
        """users + {"login": ["a", "b"]} -> .../helix/users?login=a&login=b"""
        return build_url(TWITCH_API_BASE_URL + resource, params, split_lists=True)

    def headers(self) -> Dict[str, str]:
        return {
            "Client-ID": self.client_id,
            "Authorization": f"Bearer {self.oauth}",
        }

    @abc.abstractmethod
    async def get(self, resource: str, params: QueryParams) -> dict:
        """GET a Helix resource and return the decoded body"""

    async def close(self):
        """Release resources held by the transport"""
