"""Event subscription to the local client's WebSocket.

The client speaks a WAMP 1.0 dialect: we send ``[5, <event name>]`` to
subscribe and receive ``[8, <event name>, {"uri", "eventType", "data"}]``
frames for every change. Two topics matter here:

- ``champ-select-session``: handler(event_type, payload)
- ``gameflow-phase``: handler(phase_label)
"""

import asyncio
import base64
import json
import logging
import ssl
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import WebSocketException

from draft_better.services.lcu_client import LcuCredentials
from draft_better.utils.events import EventRegistry, Subscription

logger = logging.getLogger(__name__)

CHAMP_SELECT_TOPIC = "champ-select-session"
GAMEFLOW_TOPIC = "gameflow-phase"

# topic -> (WAMP event name, resource URI)
TOPIC_EVENTS = {
    CHAMP_SELECT_TOPIC: ("OnJsonApiEvent_lol-champ-select_v1_session", "/lol-champ-select/v1/session"),
    GAMEFLOW_TOPIC: ("OnJsonApiEvent_lol-gameflow_v1_gameflow-phase", "/lol-gameflow/v1/gameflow-phase"),
}

WAMP_SUBSCRIBE = 5
WAMP_EVENT = 8


class FeedEventType(str, Enum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class SessionFeed(Protocol):
    """What the connection supervisor needs from a feed implementation."""

    async def connect(self, credentials: LcuCredentials) -> None: ...

    def subscribe(self, topic: str, handler: Callable[..., None]) -> Subscription: ...

    def on_close(self, handler: Callable[[], None]) -> Subscription: ...

    async def close(self) -> None: ...


def _insecure_ssl_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class LcuSessionFeed:
    """SessionFeed over the client's WebSocket."""

    def __init__(self):
        self._topics: dict[str, EventRegistry] = {
            topic: EventRegistry(topic) for topic in TOPIC_EVENTS
        }
        self._closed_handlers: EventRegistry[Callable[[], None]] = EventRegistry("feed_closed")
        self._ws: Optional[ClientConnection] = None
        self._reader_task: Optional[asyncio.Task] = None
        self._closing = False

    @property
    def is_open(self) -> bool:
        return self._ws is not None

    def subscribe(self, topic: str, handler: Callable[..., None]) -> Subscription:
        if topic not in self._topics:
            raise ValueError(f"Unknown topic: {topic}")
        return self._topics[topic].subscribe(handler)

    def on_close(self, handler: Callable[[], None]) -> Subscription:
        return self._closed_handlers.subscribe(handler)

    async def connect(self, credentials: LcuCredentials) -> None:
        """Open the socket and subscribe to every known topic.

        Raises:
            OSError, WebSocketException: If the client refuses the connection
        """
        await self.close()
        self._closing = False

        ws = await connect(
            credentials.websocket_url,
            additional_headers={"Authorization": _basic_auth(credentials.password)},
            ssl=_insecure_ssl_context() if credentials.protocol == "https" else None,
            open_timeout=5,
        )
        try:
            for event_name, _uri in TOPIC_EVENTS.values():
                await ws.send(json.dumps([WAMP_SUBSCRIBE, event_name]))
        except BaseException:
            await ws.close()
            raise

        self._ws = ws
        self._reader_task = asyncio.create_task(self._read_loop(ws))

    async def _read_loop(self, ws: ClientConnection) -> None:
        try:
            async for message in ws:
                self.handle_message(message)
        except asyncio.CancelledError:
            raise
        except (WebSocketException, OSError) as e:
            logger.debug(f"Feed socket error: {e}")
        finally:
            if self._ws is ws:
                self._ws = None
            if not self._closing:
                logger.debug("Feed socket closed by client")
                self._closed_handlers.emit()

    def handle_message(self, message: Any) -> None:
        """Dispatch one raw frame to the matching topic handlers."""
        try:
            frame = json.loads(message)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-JSON frame: {message!r:.80}")
            return

        if not isinstance(frame, list) or len(frame) < 3 or frame[0] != WAMP_EVENT:
            return
        event = frame[2]
        if not isinstance(event, dict):
            return

        uri = event.get("uri")
        if uri == TOPIC_EVENTS[CHAMP_SELECT_TOPIC][1]:
            try:
                event_type = FeedEventType(event.get("eventType"))
            except ValueError:
                logger.debug(f"Unknown champ select event type: {event.get('eventType')}")
                return
            self._topics[CHAMP_SELECT_TOPIC].emit(event_type, event.get("data"))
        elif uri == TOPIC_EVENTS[GAMEFLOW_TOPIC][1]:
            self._topics[GAMEFLOW_TOPIC].emit(event.get("data"))

    async def close(self) -> None:
        """Close the socket; errors from an already-closed socket are ignored."""
        self._closing = True
        task, self._reader_task = self._reader_task, None
        ws, self._ws = self._ws, None

        if task and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if ws is not None:
            try:
                await ws.close()
            except (WebSocketException, OSError) as e:
                logger.debug(f"Ignoring error while closing feed: {e}")


def _basic_auth(password: str) -> str:
    token = base64.b64encode(f"riot:{password}".encode("ascii")).decode("ascii")
    return f"Basic {token}"
