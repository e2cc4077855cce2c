"""Porta de publicação de eventos em tempo real."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class EventPublisher(ABC):
    """Entrega eventos de mudança de estado aos observadores conectados."""

    @abstractmethod
    def publish(self, event: str, data: Mapping[str, Any]) -> None:
        """Publicar sem bloquear e sem levantar exceções para o chamador."""
