"""Canais WebSocket e SSE que difundem eventos de mudança de estado."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import APIRouter, FastAPI, Request, WebSocket, WebSocketDisconnect
from sse_starlette.sse import EventSourceResponse

from .broadcaster import Subscription

if TYPE_CHECKING:
    from socorro.container import SocorroContainer

log = logging.getLogger(__name__)

# Intervalo máximo entre verificações de desconexão do cliente SSE
_SSE_POLL_SECONDS = 1.0


async def _wait_disconnect(websocket: WebSocket) -> None:
    # Mensagens recebidas dos observadores são ignoradas
    try:
        while True:
            message = await websocket.receive()
            if message.get("type") == "websocket.disconnect":
                return
    except (WebSocketDisconnect, RuntimeError):
        return


async def event_stream(
    request: Request,
    subscription: Subscription,
    *,
    poll_seconds: float = _SSE_POLL_SECONDS,
) -> AsyncIterator[dict[str, str]]:
    """Converte os eventos da inscrição em mensagens SSE até o cliente sair."""

    try:
        while True:
            if await request.is_disconnected():
                break
            try:
                event = await asyncio.wait_for(subscription.next_event(), timeout=poll_seconds)
            except asyncio.TimeoutError:
                continue
            yield {"event": event.event, "data": json.dumps(dict(event.data))}
    finally:
        subscription.close()
        log.info("Observador SSE desconectado: %s", subscription.id)


def include_routes(app: FastAPI, container: "SocorroContainer", *, prefix: str = "") -> None:
    router = APIRouter(prefix=prefix, tags=["Tempo real"])
    broadcaster = container.broadcaster

    @router.websocket("/ws")
    async def realtime(websocket: WebSocket) -> None:
        subscription = broadcaster.subscribe()
        await websocket.accept()
        log.info("Observador conectado: %s", subscription.id)

        disconnect = asyncio.ensure_future(_wait_disconnect(websocket))
        try:
            while True:
                next_event = asyncio.ensure_future(subscription.next_event())
                done, _ = await asyncio.wait(
                    {next_event, disconnect}, return_when=asyncio.FIRST_COMPLETED
                )
                if next_event not in done:
                    next_event.cancel()
                    break
                await websocket.send_json(next_event.result().to_mapping())
        except (WebSocketDisconnect, RuntimeError):
            pass
        finally:
            subscription.close()
            disconnect.cancel()
            log.info("Observador desconectado: %s", subscription.id)

    @router.get("/events")
    async def realtime_stream(request: Request) -> EventSourceResponse:
        """Mesmos eventos do ``/ws`` transmitidos via Server-Sent Events."""

        subscription = broadcaster.subscribe()
        log.info("Observador SSE conectado: %s", subscription.id)
        return EventSourceResponse(event_stream(request, subscription))

    app.include_router(router)


__all__ = ["event_stream", "include_routes"]
