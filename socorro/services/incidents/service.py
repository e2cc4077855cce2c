"""Operações de mutação de ocorrências e relatos seguidas de difusão em tempo real."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from socorro.domain.entities import (
    AuditEntry,
    Coordinates,
    Incident,
    Report,
    SocialPost,
    VerificationStatus,
    normalize_tags,
)
from socorro.domain.errors import IncidentNotFound
from socorro.domain.ports import EventPublisher, SocialFeed
from socorro.domain.repositories import IncidentRepository, ReportRepository
from socorro.services.enrichment import Geocoder
from socorro.services.realtime import INCIDENT_CHANGED, SOCIAL_SIGNAL_REFRESHED

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IncidentService:
    """Cria, lista, atualiza e remove ocorrências.

    Cada mutação anexa uma entrada de auditoria na mesma escrita e só é
    difundida depois que a persistência confirma a operação. Erros da
    persistência interrompem o fluxo antes da difusão.
    """

    def __init__(
        self,
        repository: IncidentRepository,
        publisher: EventPublisher,
        *,
        geocoder: Geocoder | None = None,
        clock: Clock | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._publisher = publisher
        self._geocoder = geocoder
        self._clock = clock or _utcnow
        self._log = logger or logging.getLogger("socorro.incidents")

    def create(
        self,
        *,
        title: str,
        owner_id: str,
        location_name: str | None = None,
        description: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Incident:
        now = self._clock()
        incident = Incident(
            title=title,
            owner_id=owner_id,
            location_name=location_name,
            coordinates=self._resolve_coordinates(location_name),
            description=description,
            tags=normalize_tags(tags),
            created_at=now,
        ).with_audit("create", owner_id, now)

        stored = self._repository.add(incident)
        self._log.info("Ocorrência criada: %s em %s", stored.title, stored.location_name)
        self._publisher.publish(
            INCIDENT_CHANGED, {"action": "create", "incident": stored.to_mapping()}
        )
        return stored

    def list(self, *, tag: str | None = None) -> List[Incident]:
        return list(self._repository.list(tag=tag))

    def update(
        self,
        incident_id: str,
        *,
        user_id: str,
        title: str,
        location_name: str | None = None,
        description: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Incident:
        changes = {
            "title": title,
            "location_name": location_name,
            "coordinates": self._resolve_coordinates(location_name),
            "description": description,
            "tags": normalize_tags(tags),
        }
        audit = AuditEntry(action="update", user_id=user_id, timestamp=self._clock())

        stored = self._repository.update(incident_id, changes, audit)
        if stored is None:
            raise IncidentNotFound(incident_id)
        self._log.info("Ocorrência atualizada: %s", stored.title)
        self._publisher.publish(
            INCIDENT_CHANGED, {"action": "update", "incident": stored.to_mapping()}
        )
        return stored

    def delete(self, incident_id: str) -> None:
        if not self._repository.delete(incident_id):
            raise IncidentNotFound(incident_id)
        self._log.info("Ocorrência removida: %s", incident_id)
        self._publisher.publish(INCIDENT_CHANGED, {"action": "delete", "id": incident_id})

    def _resolve_coordinates(self, location_name: str | None) -> Optional[Coordinates]:
        if not location_name or self._geocoder is None:
            return None
        return self._geocoder.geocode(location_name)


class ReportService:
    """Registra e lista relatos; novos relatos sempre começam pendentes."""

    def __init__(
        self,
        repository: ReportRepository,
        *,
        clock: Clock | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or _utcnow
        self._log = logger or logging.getLogger("socorro.reports")

    def create(
        self,
        *,
        disaster_id: str,
        user_id: str,
        content: str,
        image_url: str | None = None,
    ) -> Report:
        report = Report(
            disaster_id=disaster_id,
            user_id=user_id,
            content=content,
            image_url=image_url or None,
            verification_status=VerificationStatus.PENDING,
            created_at=self._clock(),
        )
        stored = self._repository.add(report)
        self._log.info("Relato registrado: %s...", content[:50])
        return stored

    def list(self, disaster_id: str) -> List[Report]:
        return list(self._repository.list_by_disaster(disaster_id))


class SocialSignalService:
    """Consulta o feed social da ocorrência e difunde o resultado."""

    def __init__(self, feed: SocialFeed, publisher: EventPublisher) -> None:
        self._feed = feed
        self._publisher = publisher

    def refresh(self, disaster_id: str) -> List[SocialPost]:
        posts = list(self._feed.fetch(disaster_id))
        self._publisher.publish(
            SOCIAL_SIGNAL_REFRESHED,
            {"incident_id": disaster_id, "items": [post.to_mapping() for post in posts]},
        )
        return posts


__all__ = ["IncidentService", "ReportService", "SocialSignalService"]
