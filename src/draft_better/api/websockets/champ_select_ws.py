"""WebSocket handler streaming champ select state to the UI."""

import asyncio
import json
import logging

from fastapi import WebSocket, WebSocketDisconnect

from draft_better.models.client import ConnectionStatus
from draft_better.models.view import ChampSelectView
from draft_better.services.champ_select_tracker import ChampSelectTracker
from draft_better.services.connection_supervisor import ConnectionSupervisor

logger = logging.getLogger(__name__)


def _view_message(view: ChampSelectView) -> dict:
    return {"type": "champ_select_update", "view": view.to_dict()}


def _status_message(status: ConnectionStatus) -> dict:
    return {"type": "connection_status", "status": status.value}


async def _handle_client_messages(
    websocket: WebSocket,
    tracker: ChampSelectTracker,
    outbox: asyncio.Queue,
) -> None:
    """Listen for client commands until the socket closes."""
    try:
        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received: {data}")
                continue

            if not isinstance(msg, dict):
                continue
            if msg.get("type") == "refresh":
                view = tracker.current_view
                outbox.put_nowait(_view_message(view) if view else {"type": "champ_select_end"})
            elif msg.get("type") == "ping":
                outbox.put_nowait({"type": "pong"})
    except WebSocketDisconnect:
        pass


async def champ_select_websocket(
    websocket: WebSocket,
    tracker: ChampSelectTracker,
    supervisor: ConnectionSupervisor,
):
    """Handle a UI WebSocket connection.

    Sends the connection status and current view on connect, then streams
    ``champ_select_update``, ``champ_select_end``, ``connection_status`` and
    ``gameflow_phase`` messages until the client goes away.

    Args:
        websocket: The WebSocket connection
        tracker: Champ select tracker
        supervisor: Connection supervisor
    """
    await websocket.accept()

    outbox: asyncio.Queue = asyncio.Queue()
    subscriptions = [
        tracker.on_view_updated(lambda view: outbox.put_nowait(_view_message(view))),
        tracker.on_session_ended(lambda: outbox.put_nowait({"type": "champ_select_end"})),
        supervisor.on_status_change(lambda status: outbox.put_nowait(_status_message(status))),
        supervisor.on_gameflow_change(
            lambda phase: outbox.put_nowait({"type": "gameflow_phase", "phase": phase.value})
        ),
    ]

    outbox.put_nowait(_status_message(supervisor.status))
    if tracker.current_view is not None:
        outbox.put_nowait(_view_message(tracker.current_view))

    receiver = asyncio.create_task(_handle_client_messages(websocket, tracker, outbox))
    try:
        while True:
            getter = asyncio.create_task(outbox.get())
            done, _ = await asyncio.wait({getter, receiver}, return_when=asyncio.FIRST_COMPLETED)
            if getter not in done:
                getter.cancel()
                break
            await websocket.send_json(getter.result())
    except WebSocketDisconnect:
        pass
    finally:
        for subscription in subscriptions:
            subscription.unsubscribe()
        receiver.cancel()
        try:
            await receiver
        except asyncio.CancelledError:
            pass
