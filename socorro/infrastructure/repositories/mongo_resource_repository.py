"""Implementação MongoDB do repositório de recursos de ajuda."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from pymongo.collection import Collection

from socorro.domain.entities import Coordinates, Resource
from socorro.domain.repositories import ResourceRepository

from ._errors import persistence_errors


class MongoResourceRepository(ResourceRepository):
    """Consulta recursos na coleção ``resources`` (índice ``2dsphere`` em ``location``)."""

    def __init__(self, collection: Collection) -> None:
        self._collection: Collection = collection

    def list_by_disaster(self, disaster_id: str) -> Iterable[Resource]:
        with persistence_errors("listar recursos"):
            documents = list(self._collection.find({"disaster_id": disaster_id}))
        return [self._deserialize(data) for data in documents]

    def find_nearby(
        self, disaster_id: str, lat: float, lng: float, radius_meters: float
    ) -> Iterable[Resource]:
        pipeline = [
            {
                "$geoNear": {
                    "near": Coordinates(lat=lat, lng=lng).to_geojson(),
                    "key": "location",
                    "distanceField": "distance_meters",
                    "maxDistance": radius_meters,
                    "query": {"disaster_id": disaster_id},
                    "spherical": True,
                }
            }
        ]
        # Erros do driver chegam sem tradução: o chamador decide o fallback
        documents = list(self._collection.aggregate(pipeline))
        return [self._deserialize(data) for data in documents]

    def _deserialize(self, data: Mapping[str, Any]) -> Resource:
        distance = data.get("distance_meters")
        return Resource(
            id=str(data["_id"]),
            disaster_id=str(data.get("disaster_id", "")),
            name=data.get("name", ""),
            type=data.get("type"),
            location_name=data.get("location_name"),
            coordinates=Coordinates.from_geojson(data.get("location")),
            distance_meters=float(distance) if distance is not None else None,
        )


__all__ = ["MongoResourceRepository"]
