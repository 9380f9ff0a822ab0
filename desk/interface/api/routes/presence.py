"""Presence routes: lock WebSocket and lock snapshot."""

import asyncio
import json
from typing import Any
from uuid import UUID, uuid4

import logfire
from dishka import AsyncContainer
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, WebSocket, WebSocketDisconnect

from desk.application.usecase.dto import LockInfo
from desk.application.usecase.review import ListLocksResponse, ListLocksUseCase
from desk.config import AuthSettings
from desk.domain.error import PresenceUnavailableError
from desk.domain.model import Lock
from desk.domain.service import JWTService, PresenceRegistry
from desk.domain.value import Editor, MaterialId
from desk.interface.api.dependencies import require_user

router = APIRouter(prefix="/presence", tags=["presence"], route_class=DishkaRoute)

# Close code sent when the WebSocket handshake carries no valid token
CLOSE_NOT_AUTHENTICATED = 4401


@router.get("/locks", response_model=ListLocksResponse)
async def list_locks(
    list_locks_use_case: FromDishka[ListLocksUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListLocksResponse:
    """Current soft locks, oldest first."""
    require_user(jwt_service, auth_token)
    return await list_locks_use_case.execute()


@router.websocket("")
async def presence_socket(websocket: WebSocket) -> None:
    """Presence connection of one browser tab.

    Protocol:
        server -> {"type": "hello", "key": <presence key>}
        server -> {"type": "snapshot", "connected": bool, "locks": [...]}
                  initially and after every change
        client -> {"type": "track", "material_id": <uuid>}
        client -> {"type": "untrack"}
        server -> {"type": "error", "detail": ...} for rejected messages

    The presence key can be passed when starting a review so the session's
    lock and this connection share one membership. Closing the socket
    removes the membership.
    """
    container: AsyncContainer = websocket.app.state.dishka_container
    registry = await container.get(PresenceRegistry)
    auth_settings = await container.get(AuthSettings)
    async with container() as request_container:
        jwt_service = await request_container.get(JWTService)

    payload = jwt_service.get_payload_from_token(
        websocket.cookies.get(auth_settings.cookie_name)
    )
    if payload is None:
        logfire.info("Presence connection refused, not authenticated")
        await websocket.close(code=CLOSE_NOT_AUTHENTICATED)
        return

    await websocket.accept()
    key = str(uuid4())
    editor = Editor(identity=payload.email, key=key)
    queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
    unsubscribe = registry.on_change(
        lambda locks: queue.put_nowait(_snapshot_message(locks, connected=True))
    )
    sender: asyncio.Task | None = None

    logfire.info("Presence connection opened", editor=editor.identity, key=key)
    try:
        async with registry.connection(key, owner=editor.identity):
            await websocket.send_json({"type": "hello", "key": key})
            await queue.put(await _current_snapshot(registry))
            sender = asyncio.create_task(_send_snapshots(websocket, queue))

            while True:
                text = await websocket.receive_text()
                await _handle_message(websocket, registry, editor, text)
    except WebSocketDisconnect:
        logfire.info("Presence connection closed", editor=editor.identity, key=key)
    finally:
        unsubscribe()
        if sender is not None:
            sender.cancel()


async def _handle_message(
    websocket: WebSocket, registry: PresenceRegistry, editor: Editor, text: str
) -> None:
    try:
        message = json.loads(text)
    except json.JSONDecodeError:
        await _send_error(websocket, "Message is not valid JSON")
        return
    if not isinstance(message, dict):
        await _send_error(websocket, "Message must be an object")
        return

    kind = message.get("type")
    try:
        if kind == "track":
            try:
                material_id = MaterialId(UUID(str(message.get("material_id"))))
            except ValueError:
                await _send_error(websocket, "track requires a material_id")
                return
            await registry.join(editor, material_id)
        elif kind == "untrack":
            await registry.leave(editor.key)
        else:
            await _send_error(websocket, f"Unknown message type: {kind}")
    except PresenceUnavailableError as e:
        logfire.warn("Presence message dropped", key=editor.key, error=str(e))
        await _send_error(websocket, str(e))


async def _current_snapshot(registry: PresenceRegistry) -> dict[str, Any]:
    try:
        return _snapshot_message(await registry.snapshot(), connected=True)
    except PresenceUnavailableError:
        return _snapshot_message({}, connected=False)


async def _send_snapshots(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        message = await queue.get()
        try:
            await websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError):
            # Socket already closed; the receive loop ends the connection
            return


async def _send_error(websocket: WebSocket, detail: str) -> None:
    await websocket.send_json({"type": "error", "detail": detail})


def _snapshot_message(locks: dict[MaterialId, Lock], connected: bool) -> dict[str, Any]:
    return {
        "type": "snapshot",
        "connected": connected,
        "locks": [
            LockInfo.from_domain(lock).model_dump(mode="json")
            for lock in sorted(locks.values(), key=lambda lock: lock.locked_at)
        ],
    }
