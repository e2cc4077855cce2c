"""Difusão em memória (publish/subscribe) de eventos para observadores conectados."""
from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from typing import Any, Mapping

from socorro.domain.ports import EventPublisher

from .events import RealtimeEvent

log = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class Subscription:
    """Fila de eventos de um observador, consumida no laço de eventos dele."""

    def __init__(
        self,
        broadcaster: "Broadcaster",
        subscription_id: int,
        loop: asyncio.AbstractEventLoop,
        max_queue_size: int,
    ) -> None:
        self.id = subscription_id
        self._broadcaster = broadcaster
        self._loop = loop
        self._queue: asyncio.Queue[RealtimeEvent] = asyncio.Queue(maxsize=max_queue_size)

    async def next_event(self) -> RealtimeEvent:
        return await self._queue.get()

    def close(self) -> None:
        self._broadcaster.unsubscribe(self)

    def deliver(self, event: RealtimeEvent) -> None:
        """Agenda a entrega sem bloquear; pode ser chamado de qualquer thread."""

        try:
            self._loop.call_soon_threadsafe(self._offer, event)
        except RuntimeError:
            # Laço encerrado: o observador já se desconectou
            log.debug("Laço do observador %s encerrado; removendo inscrição", self.id)
            self.close()

    def _offer(self, event: RealtimeEvent) -> None:
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            log.warning("Fila do observador %s cheia; evento %s descartado", self.id, event.event)


class Broadcaster(EventPublisher):
    """Entrega cada evento a todos os observadores conectados no momento.

    Não há confirmação de entrega nem reprodução: quem se conecta depois de um
    evento não o recebe e deve consultar o estado inicial explicitamente.
    """

    def __init__(self, *, max_queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._lock = threading.Lock()
        self._subscriptions: dict[int, Subscription] = {}
        self._ids = itertools.count(1)
        self._max_queue_size = max_queue_size

    @property
    def observer_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self) -> Subscription:
        """Registra um observador; deve ser chamado dentro do laço de eventos dele."""

        loop = asyncio.get_running_loop()
        with self._lock:
            subscription = Subscription(self, next(self._ids), loop, self._max_queue_size)
            self._subscriptions[subscription.id] = subscription
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscriptions.pop(subscription.id, None)

    def publish(self, event: str, data: Mapping[str, Any]) -> None:
        message = RealtimeEvent(event=event, data=dict(data))
        with self._lock:
            targets = list(self._subscriptions.values())
        for subscription in targets:
            try:
                subscription.deliver(message)
            except Exception:
                log.exception("Falha ao entregar o evento %s ao observador %s", event, subscription.id)
        log.debug("Evento %s difundido para %d observador(es)", event, len(targets))


__all__ = ["Broadcaster", "DEFAULT_QUEUE_SIZE", "Subscription"]
