"""Estruturas geográficas compartilhadas pelo enriquecimento."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Coordinates:
    """Par latitude/longitude em graus decimais."""

    lat: float
    lng: float

    def is_valid(self) -> bool:
        """Indica se o par está dentro dos limites geográficos válidos."""

        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            return False
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lng <= 180.0

    def to_mapping(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    def to_geojson(self) -> dict[str, Any]:
        """Serializa como ``Point`` GeoJSON, que usa a ordem ``[lng, lat]``."""

        return {"type": "Point", "coordinates": [self.lng, self.lat]}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Coordinates":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))

    @classmethod
    def from_geojson(cls, data: Mapping[str, Any] | None) -> Optional["Coordinates"]:
        if not data:
            return None
        values = data.get("coordinates")
        if not isinstance(values, (list, tuple)) or len(values) != 2:
            return None
        try:
            return cls(lat=float(values[1]), lng=float(values[0]))
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class GeocodeResult:
    """Resultado da cadeia extração de local -> geocodificação."""

    #: Nome do local extraído do texto livre.
    location_name: str
    #: Coordenadas resolvidas para ``location_name``.
    coordinates: Coordinates

    def to_mapping(self) -> dict[str, Any]:
        return {
            "locationName": self.location_name,
            "coordinates": self.coordinates.to_mapping(),
        }
