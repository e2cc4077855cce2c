"""Busca de recursos de ajuda por proximidade com fallback para varredura simples."""
from __future__ import annotations

import logging
import math
from typing import List

from socorro.domain.entities import Coordinates, Resource
from socorro.domain.repositories import ResourceRepository

DEFAULT_RADIUS_METERS = 10_000.0


class ResourceLocator:
    """Lista os recursos de uma ocorrência, ordenando por distância quando possível.

    A busca geoespacial é um refinamento: qualquer falha nela (consulta não
    suportada, entrada malformada ou erro do banco) cai silenciosamente na
    listagem simples. Apenas falhas da listagem simples chegam ao chamador.
    """

    def __init__(
        self,
        repository: ResourceRepository,
        *,
        default_radius_meters: float = DEFAULT_RADIUS_METERS,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._default_radius = default_radius_meters
        self._log = logger or logging.getLogger("socorro.resource_locator")

    def locate(
        self,
        disaster_id: str,
        *,
        lat: float | None = None,
        lng: float | None = None,
        radius_meters: float | None = None,
    ) -> List[Resource]:
        if lat is None or lng is None:
            return list(self._repository.list_by_disaster(disaster_id))

        radius = self._default_radius if radius_meters is None else radius_meters
        try:
            _validate_query(lat, lng, radius)
            return list(self._repository.find_nearby(disaster_id, lat, lng, radius))
        except Exception as exc:
            self._log.warning(
                "Busca por proximidade indisponível para %s (%s); usando listagem simples",
                disaster_id,
                exc,
            )
        return list(self._repository.list_by_disaster(disaster_id))


def _validate_query(lat: float, lng: float, radius: float) -> None:
    if not Coordinates(lat=lat, lng=lng).is_valid():
        raise ValueError(f"Coordenadas inválidas: {lat}, {lng}")
    if not math.isfinite(radius) or radius <= 0:
        raise ValueError(f"Raio inválido: {radius}")


__all__ = ["DEFAULT_RADIUS_METERS", "ResourceLocator"]
