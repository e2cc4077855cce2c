"""Implementações do armazenamento de cache com expiração (TTL)."""

from __future__ import annotations

import logging
import threading
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from bson.errors import InvalidDocument
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from socorro.domain.ports import DEFAULT_TTL, CacheStore

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: Any) -> datetime | None:
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        # O pymongo devolve datas ingênuas em UTC quando tz_aware=False
        return value.replace(tzinfo=timezone.utc)
    return value


class MongoCacheStore(CacheStore):
    """Persiste entradas de cache em uma coleção MongoDB (``_id`` = chave)."""

    def __init__(
        self,
        collection: Collection,
        *,
        default_ttl: timedelta = DEFAULT_TTL,
        clock: Clock | None = None,
    ) -> None:
        self._collection = collection
        self._default_ttl = default_ttl
        self._clock = clock or utcnow

    def get(self, key: str) -> Any | None:
        try:
            document = self._collection.find_one({"_id": key})
        except PyMongoError:
            log.warning("Falha ao ler a chave de cache %s; tratando como ausente", key, exc_info=True)
            return None
        if not document:
            return None

        expires_at = _as_aware(document.get("expires_at"))
        if expires_at is None or expires_at <= self._clock():
            return None
        return document.get("value")

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> bool:
        window = self._default_ttl if ttl is None else ttl
        document = {
            "_id": key,
            "value": value,
            "expires_at": self._clock() + window,
        }
        try:
            self._collection.replace_one({"_id": key}, document, upsert=True)
        except (PyMongoError, InvalidDocument):
            log.warning("Falha ao gravar a chave de cache %s; seguindo sem cache", key, exc_info=True)
            return False
        return True

    def ensure_indexes(self) -> None:
        """Cria o índice TTL que descarta documentos vencidos no servidor."""

        self._collection.create_index(
            [("expires_at", ASCENDING)],
            name="cache_expires_at_ttl",
            expireAfterSeconds=0,
        )


class MemoryCacheStore(CacheStore):
    """Mantém as entradas de cache em memória, isoladas por cópia profunda."""

    def __init__(
        self,
        *,
        default_ttl: timedelta = DEFAULT_TTL,
        clock: Clock | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[Any, datetime]] = {}
        self._default_ttl = default_ttl
        self._clock = clock or utcnow

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
        return deepcopy(value)

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> bool:
        window = self._default_ttl if ttl is None else ttl
        expires_at = self._clock() + window
        stored = deepcopy(value)
        with self._lock:
            self._entries[key] = (stored, expires_at)
        return True


__all__ = ["Clock", "MemoryCacheStore", "MongoCacheStore", "utcnow"]
