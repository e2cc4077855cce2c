"""Rotas HTTP de ocorrências, relatos e sinais sociais."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel, Field

from socorro.domain.entities import Incident, Report
from socorro.services.enrichment.api import CoordinatesResponse

if TYPE_CHECKING:
    from socorro.container import SocorroContainer


class IncidentPayload(BaseModel):
    """Dados enviados ao criar ou atualizar uma ocorrência."""

    title: str
    location_name: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    #: Responsável pela mutação; usa o padrão configurado quando omitido.
    owner_id: str | None = None


class AuditEntryResponse(BaseModel):
    action: str
    user_id: str
    timestamp: str | None = None


class IncidentResponse(BaseModel):
    """Representação pública de uma ocorrência."""

    id: str
    title: str
    location_name: str | None = None
    #: Coordenadas resolvidas a partir de ``location_name``.
    location: CoordinatesResponse | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    owner_id: str
    audit_trail: list[AuditEntryResponse] = Field(default_factory=list)
    created_at: str | None = None


class ReportPayload(BaseModel):
    disaster_id: str
    content: str
    user_id: str | None = None
    image_url: str | None = None


class ReportResponse(BaseModel):
    id: str
    disaster_id: str
    user_id: str
    content: str
    image_url: str | None = None
    verification_status: str
    created_at: str | None = None


class SocialPostResponse(BaseModel):
    post: str
    user: str
    timestamp: str


class MessageResponse(BaseModel):
    message: str


def map_incident(incident: Incident) -> IncidentResponse:
    return IncidentResponse(**incident.to_mapping())


def map_report(report: Report) -> ReportResponse:
    return ReportResponse(**report.to_mapping())


def include_routes(app: FastAPI, container: "SocorroContainer", *, prefix: str = "") -> None:
    """Registra as rotas de ocorrências, relatos e feed social."""

    router = APIRouter(prefix=prefix, tags=["Ocorrências"])
    settings = container.settings

    @router.post("/disasters", response_model=IncidentResponse)
    def create_incident(payload: IncidentPayload) -> IncidentResponse:
        incident = container.incident_service.create(
            title=payload.title,
            owner_id=payload.owner_id or settings.default_owner_id,
            location_name=payload.location_name,
            description=payload.description,
            tags=payload.tags,
        )
        return map_incident(incident)

    @router.get("/disasters", response_model=list[IncidentResponse])
    def list_incidents(tag: str | None = None) -> list[IncidentResponse]:
        return [map_incident(item) for item in container.incident_service.list(tag=tag)]

    @router.put("/disasters/{disaster_id}", response_model=IncidentResponse)
    def update_incident(disaster_id: str, payload: IncidentPayload) -> IncidentResponse:
        incident = container.incident_service.update(
            disaster_id,
            user_id=payload.owner_id or settings.default_owner_id,
            title=payload.title,
            location_name=payload.location_name,
            description=payload.description,
            tags=payload.tags,
        )
        return map_incident(incident)

    @router.delete("/disasters/{disaster_id}", response_model=MessageResponse)
    def delete_incident(disaster_id: str) -> MessageResponse:
        container.incident_service.delete(disaster_id)
        return MessageResponse(message="Disaster deleted successfully")

    @router.get(
        "/disasters/{disaster_id}/social-media", response_model=list[SocialPostResponse]
    )
    def social_media(disaster_id: str) -> list[SocialPostResponse]:
        """Consulta o feed social e difunde ``social_signal_refreshed``."""

        posts = container.social_signal_service.refresh(disaster_id)
        return [SocialPostResponse(**post.to_mapping()) for post in posts]

    @router.post("/reports", response_model=ReportResponse)
    def create_report(payload: ReportPayload) -> ReportResponse:
        report = container.report_service.create(
            disaster_id=payload.disaster_id,
            user_id=payload.user_id or settings.default_reporter_id,
            content=payload.content,
            image_url=payload.image_url,
        )
        return map_report(report)

    @router.get("/reports/{disaster_id}", response_model=list[ReportResponse])
    def list_reports(disaster_id: str) -> list[ReportResponse]:
        return [map_report(report) for report in container.report_service.list(disaster_id)]

    app.include_router(router)


__all__ = [
    "IncidentPayload",
    "IncidentResponse",
    "ReportPayload",
    "ReportResponse",
    "SocialPostResponse",
    "include_routes",
    "map_incident",
    "map_report",
]
