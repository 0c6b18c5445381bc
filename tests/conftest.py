"""
Shared fixtures: a channel that records outbound messages instead of
posting them, and a search provider with a canned answer.
"""

import pytest

from vvbot.bus.events import OutboundMessage
from vvbot.channels.base import BaseChannel
from vvbot.search.base import SearchProvider, SearchResult

BOT_QQ = "123456"
MENTION = f"[CQ:at,qq={BOT_QQ}]"


class RecordingChannel(BaseChannel):
    name = "recording"

    def __init__(self):
        self.sent: list[OutboundMessage] = []

    async def send(self, msg: OutboundMessage) -> bool:
        self.sent.append(msg)
        return True


class StubSearch(SearchProvider):
    def __init__(self, url: str = ""):
        self.url = url
        self.calls: list[str] = []

    async def search(self, keyword: str) -> SearchResult:
        self.calls.append(keyword)
        if self.url:
            return SearchResult.hit(self.url)
        return SearchResult.miss("stub has no result")


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def search() -> StubSearch:
    return StubSearch("https://x/y/img.png")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep config-related environment variables from leaking into tests."""
    for name in (
        "NAPCAT_API_HOST",
        "VVBOT_QQ",
        "VVBOT_NAPCAT_API_HOST",
        "VVBOT_NAPCAT_API_PORT",
        "VVBOT_NAPCAT_ACCESS_TOKEN",
        "VVBOT_LISTEN_PORT",
        "VVBOT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
