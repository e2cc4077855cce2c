"""Geocodificação de nomes de lugares com cache."""
from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from socorro.domain.entities import Coordinates
from socorro.domain.errors import ProviderError
from socorro.domain.ports import CacheStore, GeocodingProvider

CACHE_PREFIX = "geocode_"


def cache_key(place_name: str) -> str:
    """Chave sensível a maiúsculas e espaços; nomes equivalentes podem divergir."""

    return f"{CACHE_PREFIX}{place_name}"


class Geocoder:
    """Resolve nomes de lugares em coordenadas, compartilhando o cache entre chamadores."""

    def __init__(
        self,
        cache: CacheStore,
        provider: GeocodingProvider,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cache = cache
        self._provider = provider
        self._log = logger or logging.getLogger("socorro.geocoder")

    def geocode(self, place_name: str) -> Coordinates | None:
        """Retorna as coordenadas de ``place_name`` ou ``None`` quando não encontrado.

        Nomes sem correspondência não são gravados no cache, e falhas do
        provedor produzem o mesmo ``None``.
        """

        if not place_name or not place_name.strip():
            return None

        key = cache_key(place_name)
        cached = self._cache.get(key)
        if cached is not None:
            try:
                return Coordinates.from_mapping(cached)
            except (KeyError, TypeError, ValueError):
                self._log.warning("Entrada de cache inválida para %s; recalculando", key)

        try:
            matches = self._provider.search(place_name, limit=1)
        except ProviderError as exc:
            self._log.error("Falha ao geocodificar %r: %s", place_name, exc)
            return None

        if not matches:
            self._log.info("Nenhuma correspondência para %r", place_name)
            return None

        coordinates = _parse_match(matches[0])
        if coordinates is None:
            self._log.warning("Correspondência sem coordenadas válidas para %r", place_name)
            return None

        self._cache.set(key, coordinates.to_mapping())
        return coordinates


def _parse_match(match: Mapping[str, Any]) -> Coordinates | None:
    try:
        lat = float(match["lat"])
        lng = float(match.get("lon", match.get("lng")))
    except (KeyError, TypeError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return Coordinates(lat=lat, lng=lng)


__all__ = ["CACHE_PREFIX", "Geocoder", "cache_key"]
