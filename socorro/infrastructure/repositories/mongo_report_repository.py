"""Implementação MongoDB do repositório de relatos."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from pymongo import DESCENDING
from pymongo.collection import Collection

from socorro.domain.entities import Report, VerificationStatus
from socorro.domain.repositories import ReportRepository

from ._errors import persistence_errors


class MongoReportRepository(ReportRepository):
    """Persiste entidades :class:`Report` na coleção ``reports``."""

    def __init__(self, collection: Collection) -> None:
        self._collection: Collection = collection

    def add(self, report: Report) -> Report:
        document = {
            "disaster_id": report.disaster_id,
            "user_id": report.user_id,
            "content": report.content,
            "image_url": report.image_url,
            "verification_status": report.verification_status.value,
            "created_at": report.created_at,
        }
        with persistence_errors("inserir relato"):
            result = self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return self._deserialize(document)

    def list_by_disaster(self, disaster_id: str) -> Iterable[Report]:
        with persistence_errors("listar relatos"):
            documents = list(
                self._collection.find({"disaster_id": disaster_id}).sort(
                    "created_at", DESCENDING
                )
            )
        return [self._deserialize(data) for data in documents]

    def set_status_by_image(self, image_url: str, status: VerificationStatus) -> int:
        with persistence_errors("atualizar status de verificação"):
            result = self._collection.update_many(
                {"image_url": image_url},
                {"$set": {"verification_status": status.value}},
            )
        return int(getattr(result, "modified_count", 0))

    def _deserialize(self, data: Mapping[str, Any]) -> Report:
        raw_status = data.get("verification_status") or VerificationStatus.PENDING.value
        try:
            status = VerificationStatus(raw_status)
        except ValueError:
            status = VerificationStatus.PENDING
        return Report(
            id=str(data["_id"]),
            disaster_id=str(data.get("disaster_id", "")),
            user_id=str(data.get("user_id", "")),
            content=data.get("content", ""),
            image_url=data.get("image_url"),
            verification_status=status,
            created_at=data.get("created_at"),
        )


__all__ = ["MongoReportRepository"]
