"""Porta do armazenamento chave/valor com expiração."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

DEFAULT_TTL = timedelta(minutes=60)


class CacheStore(ABC):
    """Armazenamento compartilhado que decide se um fato caro já é conhecido.

    ``get`` nunca devolve valores expirados e ``set`` sempre sobrescreve,
    reiniciando a janela de expiração. Falhas de armazenamento não chegam ao
    chamador: leituras viram ausência e escritas retornam ``False``.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Retornar o valor vivo associado à chave ou ``None``."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> bool:
        """Gravar o valor com expiração ``ttl`` (padrão de 60 minutos)."""
