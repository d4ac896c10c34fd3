"""Lifecycle of the connection to the local League client.

Only ``disconnected`` and ``connected`` are observable; a connection attempt
is a transition attempt, never a state of its own. While disconnected the
supervisor retries on a fixed interval. Transport events are routed to the
champ-select tracker, and the coarse gameflow phase drives edge-triggered
game start / game end notifications.
"""

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional

from draft_better.models.client import (
    AWAITING_END_PHASES,
    GAME_ENDED_PHASES,
    IN_GAME_PHASES,
    ConnectionStatus,
    GameflowPhase,
)
from draft_better.services.champ_select_tracker import ChampSelectTracker
from draft_better.services.lcu_client import LcuClient, LcuCredentials, load_credentials
from draft_better.services.session_feed import (
    CHAMP_SELECT_TOPIC,
    GAMEFLOW_TOPIC,
    FeedEventType,
    SessionFeed,
)
from draft_better.utils.events import EventRegistry, Subscription

logger = logging.getLogger(__name__)

# Log "client not running" on the first failure and then every N failures
FAILURE_LOG_EVERY = 12


class ConnectionSupervisor:
    """Owns the feed connection, its retry loop and lifecycle notifications."""

    def __init__(
        self,
        client: LcuClient,
        feed: SessionFeed,
        tracker: ChampSelectTracker,
        credentials_loader: Optional[Callable[[], LcuCredentials]] = None,
        reconnect_interval: float = 10.0,
    ):
        """Initialize the supervisor.

        Args:
            client: Request/response client, bound to credentials on connect
            feed: Event feed to subscribe through
            tracker: Receives champ-select snapshots
            credentials_loader: Returns credentials or raises when the client
                is not running (defaults to reading the lockfile)
            reconnect_interval: Seconds between attempts while disconnected
        """
        self.client = client
        self.feed = feed
        self.tracker = tracker
        self.reconnect_interval = reconnect_interval
        self._load_credentials = credentials_loader or load_credentials

        self._status = ConnectionStatus.DISCONNECTED
        self._gameflow_phase = GameflowPhase.NONE
        self._failed_attempts = 0
        self._connecting = False
        self._watching = False
        self._retry_task: Optional[asyncio.Task] = None
        self._background: set[asyncio.Task] = set()

        self._status_changed: EventRegistry = EventRegistry("status_changed")
        self._gameflow_changed: EventRegistry = EventRegistry("gameflow_changed")
        self._game_started: EventRegistry = EventRegistry("game_started")
        self._game_ended: EventRegistry = EventRegistry("game_ended")

        self.feed.subscribe(CHAMP_SELECT_TOPIC, self.handle_champ_select_event)
        self.feed.subscribe(GAMEFLOW_TOPIC, self.handle_gameflow_phase)
        self.feed.on_close(self._on_feed_closed)

    # ------------------------------------------------------------------
    # Queries and subscriptions
    # ------------------------------------------------------------------

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def is_connected(self) -> bool:
        return self._status == ConnectionStatus.CONNECTED and self.client.is_connected

    @property
    def gameflow_phase(self) -> GameflowPhase:
        return self._gameflow_phase

    @property
    def is_watching(self) -> bool:
        return self._watching

    @property
    def failed_attempts(self) -> int:
        return self._failed_attempts

    def on_status_change(self, handler: Callable[[ConnectionStatus], None]) -> Subscription:
        return self._status_changed.subscribe(handler)

    def on_gameflow_change(self, handler: Callable[[GameflowPhase], None]) -> Subscription:
        return self._gameflow_changed.subscribe(handler)

    def on_game_start(self, handler: Callable[[], None]) -> Subscription:
        return self._game_started.subscribe(handler)

    def on_game_end(self, handler: Callable[[], None]) -> Subscription:
        return self._game_ended.subscribe(handler)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _set_status(self, status: ConnectionStatus) -> None:
        if self._status == status:
            return
        previous = self._status
        self._status = status
        if status == ConnectionStatus.CONNECTED:
            logger.info("Status: connected to League client")
        elif previous == ConnectionStatus.CONNECTED:
            logger.info("Status: disconnected from League client")
        self._status_changed.emit(status)

    async def start(self) -> None:
        """Attempt a connection now and keep retrying while disconnected."""
        if self._watching:
            return
        self._watching = True
        logger.info("Watching for League client in background...")
        await self.attempt_connection()
        self._retry_task = asyncio.create_task(self._retry_loop())

    async def _retry_loop(self) -> None:
        while self._watching:
            await asyncio.sleep(self.reconnect_interval)
            if self._status == ConnectionStatus.DISCONNECTED:
                await self.attempt_connection()

    async def attempt_connection(self) -> bool:
        """Try to authenticate and subscribe once.

        Returns:
            True if the supervisor is connected afterwards
        """
        if self._connecting:
            return False
        self._connecting = True
        self._failed_attempts += 1

        try:
            credentials = self._load_credentials()
            await self.client.connect(credentials)
            await self.feed.connect(credentials)
        except Exception as e:
            if self._failed_attempts == 1 or self._failed_attempts % FAILURE_LOG_EVERY == 0:
                logger.info("League client not running (will keep trying in background)")
            logger.debug(f"Connection attempt {self._failed_attempts} failed: {e}")
            await self.client.disconnect()
            self._set_status(ConnectionStatus.DISCONNECTED)
            return False
        finally:
            self._connecting = False

        self._failed_attempts = 0
        self._set_status(ConnectionStatus.CONNECTED)
        await self._sync_current_state()
        return True

    async def _sync_current_state(self) -> None:
        """Catch up with a client that was already past the lobby when we connected."""
        phase = await self.client.get_gameflow_phase()
        if phase is not None:
            self.handle_gameflow_phase(phase)
        session = await self.client.get_session()
        if session is not None:
            self.tracker.apply_snapshot(session)
        elif self.tracker.current_view is not None:
            # The lobby closed while we were disconnected and its Delete was missed
            self.tracker.end_session()

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _on_feed_closed(self) -> None:
        if not self._watching:
            return
        self._spawn(self.client.disconnect())
        self._set_status(ConnectionStatus.DISCONNECTED)

    async def _close_transport(self) -> None:
        try:
            await self.feed.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing feed: {e}")
        await self.client.disconnect()

    async def reconnect(self) -> bool:
        """Drop the current connection and try again immediately."""
        await self._close_transport()
        self._set_status(ConnectionStatus.DISCONNECTED)
        return await self.attempt_connection()

    async def stop(self) -> None:
        """Stop retrying, close the transport and drop the last view."""
        self._watching = False
        if self._retry_task is not None:
            self._retry_task.cancel()
            self._retry_task = None
        background, self._background = self._background, set()
        for task in background:
            task.cancel()
        if background:
            await asyncio.gather(*background, return_exceptions=True)
        await self._close_transport()
        self._set_status(ConnectionStatus.DISCONNECTED)
        if self.tracker.current_view is not None:
            self.tracker.end_session()

    # ------------------------------------------------------------------
    # Feed events
    # ------------------------------------------------------------------

    def handle_champ_select_event(self, event_type: FeedEventType, payload: Any) -> None:
        if not self._watching:
            return
        if event_type == FeedEventType.DELETE:
            self.tracker.end_session()
        else:
            self.tracker.apply_snapshot(payload)

    def handle_gameflow_phase(self, label: Any) -> None:
        """Record a gameflow phase report and fire edge callbacks."""
        phase = GameflowPhase.parse(label)
        if phase is None:
            logger.debug(f"Ignoring unknown gameflow phase: {label}")
            return

        previous = self._gameflow_phase
        if phase == previous:
            return
        self._gameflow_phase = phase
        logger.info(f"Gameflow: {previous.value} -> {phase.value}")
        self._gameflow_changed.emit(phase)

        if phase in IN_GAME_PHASES and previous not in IN_GAME_PHASES:
            logger.info("Game started")
            self._game_started.emit()
        elif phase in GAME_ENDED_PHASES and previous in AWAITING_END_PHASES:
            logger.info("Game ended")
            self._game_ended.emit()
