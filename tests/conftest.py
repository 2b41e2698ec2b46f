"""Pytest configuration and shared fixtures."""

import pytest

from slackgate.directory import Channel, Directory, User
from slackgate.gateway import Gateway
from slackgate.security import PostingPolicy
from slackgate.slack.client import SlackPage


class FakeSlackClient:
    """Stands in for SlackClient: canned pages, recorded calls."""

    def __init__(
        self,
        team="Acme",
        channel_pages=None,
        user_pages=None,
        history=None,
        replies=None,
        matches=None,
    ):
        self.team = team
        self.channel_pages = channel_pages or [SlackPage()]
        self.user_pages = user_pages or [SlackPage()]
        self.history = history or SlackPage()
        self.replies = replies or SlackPage()
        self.matches = matches or []
        self.calls = []

    async def auth_identity(self):
        self.calls.append(("auth.test",))
        return {"ok": True, "team": self.team}

    async def list_channels(self, types, cursor=None, limit=1000):
        self.calls.append(("conversations.list", types, cursor))
        return self._page(self.channel_pages, cursor)

    async def list_users(self, cursor=None, limit=1000):
        self.calls.append(("users.list", cursor))
        return self._page(self.user_pages, cursor)

    async def get_history(self, channel, cursor=None, limit=50):
        self.calls.append(("conversations.history", channel, cursor, limit))
        return self.history

    async def get_replies(self, channel, thread_ts, cursor=None, limit=50):
        self.calls.append(("conversations.replies", channel, thread_ts, cursor, limit))
        return self.replies

    async def search(self, query, count=20):
        self.calls.append(("search.messages", query, count))
        return self.matches

    async def post_message(self, channel, text, thread_ts=None):
        self.calls.append(("chat.postMessage", channel, text, thread_ts))
        return {"ts": "1700000000.000100", "channel": channel}

    def remote_calls(self, method):
        return [c for c in self.calls if c[0] == method]

    @staticmethod
    def _page(pages, cursor):
        # Page i is requested with the cursor page i-1 returned
        if cursor is None:
            return pages[0]
        for i, page in enumerate(pages[:-1]):
            if page.next_cursor == cursor:
                return pages[i + 1]
        raise AssertionError(f"unexpected cursor {cursor}")


CHANNELS = [
    Channel(id="C1", name="#general", topic='Say "hi"', purpose="Company-wide", member_count=42),
    Channel(id="C2", name="#secret", is_private=True, purpose="Leads only", member_count=3),
    Channel(id="C100", name="#deploys", member_count=7),
    Channel(id="G9", name="#mpdm-alice--bob-1", is_private=True, is_mpim=True),
    Channel(id="Q7", name="#legacy-im", is_im=True),
]

USERS = [
    User(id="U1", name="alice", real_name="Alice Liddell"),
    User(id="U2", name="bob"),
]


@pytest.fixture
def directory():
    return Directory(workspace="Acme", channels=CHANNELS, users=USERS)


@pytest.fixture
def fake_client():
    return FakeSlackClient()


@pytest.fixture
def make_gateway(directory, fake_client):
    """Factory: gateway over the shared directory with a chosen posting policy."""
    def _make(posting=None, strict_channel_ids=False, client=None):
        return Gateway(
            client or fake_client,
            directory,
            posting=posting or PostingPolicy(),
            strict_channel_ids=strict_channel_ids,
        )
    return _make


@pytest.fixture
def gateway(make_gateway):
    return make_gateway()


@pytest.fixture
def client_factory():
    """Build a FakeSlackClient with custom pages."""
    return FakeSlackClient
