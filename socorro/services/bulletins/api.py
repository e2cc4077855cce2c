"""Rotas HTTP dos boletins oficiais."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel

if TYPE_CHECKING:
    from socorro.container import SocorroContainer


class BulletinResponse(BaseModel):
    source: str
    title: str
    content: str
    url: str
    timestamp: str


def include_routes(app: FastAPI, container: "SocorroContainer", *, prefix: str = "") -> None:
    router = APIRouter(prefix=prefix, tags=["Boletins"])

    @router.get(
        "/disasters/{disaster_id}/official-updates",
        response_model=list[BulletinResponse],
    )
    def official_updates(disaster_id: str) -> list[BulletinResponse]:
        """Retorna o snapshot global de boletins, compartilhado por todas as ocorrências."""

        return [
            BulletinResponse(**bulletin.to_mapping())
            for bulletin in container.bulletin_aggregator.fetch()
        ]

    app.include_router(router)


__all__ = ["BulletinResponse", "include_routes"]
