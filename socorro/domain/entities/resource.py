"""Recursos de ajuda humanitária vinculados a uma ocorrência."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .coordinates import Coordinates


@dataclass(frozen=True)
class Resource:
    """Abrigo, ponto de distribuição ou outro recurso disponível."""

    id: str
    disaster_id: str
    name: str
    type: Optional[str] = None
    location_name: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    #: Distância até o ponto consultado; presente apenas em buscas por proximidade.
    distance_meters: Optional[float] = None

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "disaster_id": self.disaster_id,
            "name": self.name,
            "type": self.type,
            "location_name": self.location_name,
            "location": self.coordinates.to_mapping() if self.coordinates else None,
        }
        if self.distance_meters is not None:
            payload["distance_meters"] = self.distance_meters
        return payload
