"""Implementação MongoDB do repositório de ocorrências."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from socorro.domain.entities import AuditEntry, Coordinates, Incident
from socorro.domain.repositories import IncidentRepository

from ._errors import parse_object_id, persistence_errors

_MUTABLE_FIELDS = ("title", "location_name", "description", "tags")


class MongoIncidentRepository(IncidentRepository):
    """Persiste entidades :class:`Incident` na coleção ``disasters``."""

    def __init__(self, collection: Collection) -> None:
        self._collection: Collection = collection
        """Coleção MongoDB responsável por armazenar as ocorrências."""

    def add(self, incident: Incident) -> Incident:
        document = self._serialize(incident)
        with persistence_errors("inserir ocorrência"):
            result = self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return self._deserialize(document)

    def list(self, *, tag: str | None = None) -> Iterable[Incident]:
        criteria: dict[str, Any] = {}
        if tag:
            criteria["tags"] = tag
        with persistence_errors("listar ocorrências"):
            documents = list(self._collection.find(criteria).sort("created_at", DESCENDING))
        return [self._deserialize(data) for data in documents]

    def update(
        self, incident_id: str, changes: Mapping[str, Any], audit: AuditEntry
    ) -> Optional[Incident]:
        object_id = parse_object_id(incident_id)
        if object_id is None:
            return None
        fields = {key: changes[key] for key in _MUTABLE_FIELDS if key in changes}
        if "tags" in fields:
            fields["tags"] = list(fields["tags"] or ())
        if "coordinates" in changes:
            coordinates = changes["coordinates"]
            fields["location"] = coordinates.to_geojson() if coordinates else None
        update: dict[str, Any] = {"$push": {"audit_trail": audit.to_mapping()}}
        if fields:
            update["$set"] = fields
        with persistence_errors("atualizar ocorrência"):
            data = self._collection.find_one_and_update(
                {"_id": object_id},
                update,
                return_document=ReturnDocument.AFTER,
            )
        return self._deserialize(data) if data else None

    def delete(self, incident_id: str) -> bool:
        object_id = parse_object_id(incident_id)
        if object_id is None:
            return False
        with persistence_errors("remover ocorrência"):
            result = self._collection.delete_one({"_id": object_id})
        return bool(getattr(result, "deleted_count", 0))

    def _serialize(self, incident: Incident) -> dict:
        return {
            "title": incident.title,
            "location_name": incident.location_name,
            "location": incident.coordinates.to_geojson() if incident.coordinates else None,
            "description": incident.description,
            "tags": list(incident.tags),
            "owner_id": incident.owner_id,
            "audit_trail": [entry.to_mapping() for entry in incident.audit_trail],
            "created_at": incident.created_at,
        }

    def _deserialize(self, data: Mapping[str, Any]) -> Incident:
        return Incident(
            id=str(data["_id"]),
            title=data.get("title", ""),
            owner_id=data.get("owner_id", ""),
            location_name=data.get("location_name"),
            coordinates=Coordinates.from_geojson(data.get("location")),
            description=data.get("description"),
            tags=tuple(data.get("tags") or ()),
            audit_trail=tuple(
                AuditEntry.from_mapping(entry) for entry in data.get("audit_trail") or ()
            ),
            created_at=data.get("created_at"),
        )


__all__ = ["MongoIncidentRepository"]
