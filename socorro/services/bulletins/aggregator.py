"""Agregação dos boletins oficiais com um único snapshot global em cache."""
from __future__ import annotations

import logging
from typing import List

from socorro.domain.entities import Bulletin
from socorro.domain.ports import BulletinSource, CacheStore

CACHE_KEY = "official_updates"


class BulletinAggregator:
    """Compartilha entre todos os chamadores o último snapshot dos boletins."""

    def __init__(
        self,
        cache: CacheStore,
        source: BulletinSource,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cache = cache
        self._source = source
        self._log = logger or logging.getLogger("socorro.bulletins")

    def fetch(self) -> List[Bulletin]:
        cached = self._cache.get(CACHE_KEY)
        if isinstance(cached, list):
            try:
                return [Bulletin.from_mapping(item) for item in cached]
            except (KeyError, TypeError, ValueError):
                self._log.warning("Snapshot de boletins inválido no cache; recoletando")

        try:
            bulletins = list(self._source.fetch())
        except Exception:
            # Boletins são complementares: nunca propagam erro ao chamador
            self._log.exception("Erro ao coletar boletins oficiais")
            return []

        self._cache.set(CACHE_KEY, [bulletin.to_mapping() for bulletin in bulletins])
        return bulletins


__all__ = ["BulletinAggregator", "CACHE_KEY"]
