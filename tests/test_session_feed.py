"""Tests for WAMP frame dispatch in the session feed."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest

from draft_better.services.session_feed import (
    CHAMP_SELECT_TOPIC,
    GAMEFLOW_TOPIC,
    TOPIC_EVENTS,
    FeedEventType,
    LcuSessionFeed,
)
from draft_better.services.lcu_client import LcuCredentials

pytestmark = pytest.mark.anyio


def _frame(uri, event_type, data, event_name="OnJsonApiEvent"):
    return json.dumps([8, event_name, {"uri": uri, "eventType": event_type, "data": data}])


@pytest.fixture
def feed():
    return LcuSessionFeed()


@pytest.fixture
def received(feed):
    """Collect (topic, args) for every dispatched event."""
    events = []
    feed.subscribe(CHAMP_SELECT_TOPIC, lambda event_type, data: events.append(("session", event_type, data)))
    feed.subscribe(GAMEFLOW_TOPIC, lambda phase: events.append(("gameflow", phase)))
    return events


class TestHandleMessage:
    def test_session_update(self, feed, received):
        feed.handle_message(_frame("/lol-champ-select/v1/session", "Update", {"localPlayerCellId": 2}))
        assert received == [("session", FeedEventType.UPDATE, {"localPlayerCellId": 2})]

    def test_session_delete(self, feed, received):
        feed.handle_message(_frame("/lol-champ-select/v1/session", "Delete", None))
        assert received == [("session", FeedEventType.DELETE, None)]

    def test_gameflow_phase(self, feed, received):
        feed.handle_message(_frame("/lol-gameflow/v1/gameflow-phase", "Update", "InProgress"))
        assert received == [("gameflow", "InProgress")]

    @pytest.mark.parametrize(
        "message",
        [
            "",
            "not json",
            json.dumps({"uri": "/lol-champ-select/v1/session"}),
            json.dumps([0, "session-id", 1, "server"]),
            json.dumps([8, "OnJsonApiEvent", "not an object"]),
            _frame("/lol-lobby/v2/lobby", "Update", {}),
            _frame("/lol-champ-select/v1/session", "Rename", {}),
        ],
    )
    def test_ignored_frames(self, feed, received, message):
        feed.handle_message(message)
        assert received == []


def test_unknown_topic_rejected(feed):
    with pytest.raises(ValueError):
        feed.subscribe("lobby", lambda *args: None)


async def test_close_without_connect(feed):
    """Closing a feed that never opened is a no-op and does not report a drop."""
    closed = []
    feed.on_close(lambda: closed.append(True))

    await feed.close()
    await feed.close()

    assert feed.is_open is False
    assert closed == []


class FakeSocket:
    """Stands in for a websockets ClientConnection."""

    def __init__(self, frames=(), fail_send=False):
        self.frames = list(frames)
        self.fail_send = fail_send
        self.sent = []
        self.close_calls = 0

    async def send(self, message):
        if self.fail_send:
            raise OSError("broken pipe")
        self.sent.append(json.loads(message))

    async def close(self):
        self.close_calls += 1

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for frame in self.frames:
            yield frame


CREDENTIALS = LcuCredentials(port=2999, password="secret")


class TestConnect:
    async def test_subscribes_and_dispatches(self, feed, received):
        socket = FakeSocket(frames=[_frame("/lol-gameflow/v1/gameflow-phase", "Update", "ChampSelect")])
        closed = []
        feed.on_close(lambda: closed.append(True))

        with patch("draft_better.services.session_feed.connect", AsyncMock(return_value=socket)) as connect:
            await feed.connect(CREDENTIALS)
            for _ in range(5):
                await asyncio.sleep(0)

        assert connect.call_args.args[0] == "wss://127.0.0.1:2999/"
        assert socket.sent == [[5, name] for name, _uri in TOPIC_EVENTS.values()]
        assert received == [("gameflow", "ChampSelect")]
        # The socket ran out of frames without us closing it
        assert closed == [True]
        assert feed.is_open is False

    async def test_failed_subscribe_closes_socket(self, feed):
        socket = FakeSocket(fail_send=True)

        with patch("draft_better.services.session_feed.connect", AsyncMock(return_value=socket)):
            with pytest.raises(OSError):
                await feed.connect(CREDENTIALS)

        assert socket.close_calls == 1
        assert feed.is_open is False
