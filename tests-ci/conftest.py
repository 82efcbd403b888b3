"""
Pytest configuration for CI tests
Provides settings fixtures and a scripted Helix transport (no network needed)
"""
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from core.settings import NotifyConfig, SettingsStore
from twitchapi.transports.base import HelixTransport, TransportError


class FakeTransport(HelixTransport):
    """
    Helix transport answering from in-memory data.

    users: login -> user id
    live: user id -> login of the live stream (display name is its capitalized form)
    fail: predicate (resource, params) -> True to raise TransportError
    """

    name = "fake"

    def __init__(
        self,
        users: Optional[Dict[str, str]] = None,
        live: Optional[Dict[str, str]] = None,
        fail: Optional[Callable[[str, dict], bool]] = None,
        config: Optional[NotifyConfig] = None
    ):
        super().__init__(config or NotifyConfig("", "test_client_id", "test_token"))
        self.users = users or {}
        self.live = live or {}
        self.fail = fail
        self.calls: List[Tuple[str, dict]] = []
        self.closed = False

    async def get(self, resource: str, params: dict) -> dict:
        self.calls.append((resource, params))
        if self.fail and self.fail(resource, params):
            raise TransportError(f"{resource}: simulated failure")
        if resource == "users":
            return {"data": [
                {"id": self.users[login], "login": login}
                for login in params["login"] if login in self.users
            ]}
        if resource == "streams":
            return {"data": [
                {"user_id": uid, "user_login": self.live[uid], "user_name": self.live[uid].capitalize(), "type": "live"}
                for uid in params["user_id"] if uid in self.live
            ]}
        raise TransportError(f"unknown resource {resource}")

    async def close(self):
        self.closed = True

    def sizes(self, resource: str) -> List[int]:
        return [len(next(iter(p.values()))) for r, p in self.calls if r == resource]


def make_transport(channels: List[str], live: List[str], **kwargs) -> FakeTransport:
    """Users get ids "1".."n" in order; `live` lists the logins currently streaming"""
    users = {login: str(i) for i, login in enumerate(channels, start=1)}
    live_ids = {users[login]: login for login in live}
    return FakeTransport(users=users, live=live_ids, **kwargs)


@pytest.fixture
def mock_config():
    """Mock configuration for tests (no real tokens needed)"""
    return {
        "twitch": {
            "channels": "alpha beta gamma",
            "client_id": "test_client_id",
            "oauth": "oauth:test_token",
        },
        "monitoring": {
            "polling_interval": 3600,
            "transport": "http",
        },
    }


@pytest.fixture
def settings(mock_config):
    return SettingsStore(mock_config)


@pytest.fixture
def fake_transport():
    """Factory: fake_transport(channels, live, fail=None) -> FakeTransport"""
    return make_transport


@pytest.fixture
def fake_transport_cls():
    return FakeTransport
