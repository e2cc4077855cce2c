"""Rotas HTTP de consulta de recursos de ajuda."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel

from socorro.domain.entities import Resource
from socorro.services.enrichment.api import CoordinatesResponse

if TYPE_CHECKING:
    from socorro.container import SocorroContainer


class ResourceResponse(BaseModel):
    """Representação pública de um recurso de ajuda."""

    id: str
    disaster_id: str
    name: str
    type: str | None = None
    location_name: str | None = None
    location: CoordinatesResponse | None = None
    #: Presente apenas quando a busca por proximidade foi aplicada.
    distance_meters: float | None = None


def _parse_float(value: str | None) -> float | None:
    """Converte o parâmetro de consulta; valores malformados viram ``nan``."""

    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        return math.nan


def map_resource(resource: Resource) -> ResourceResponse:
    return ResourceResponse(**resource.to_mapping())


def include_routes(app: FastAPI, container: "SocorroContainer", *, prefix: str = "") -> None:
    router = APIRouter(prefix=prefix, tags=["Recursos"])

    @router.get("/disasters/{disaster_id}/resources", response_model=list[ResourceResponse])
    def list_resources(
        disaster_id: str,
        lat: str | None = None,
        lng: str | None = None,
        radius: str | None = None,
    ) -> list[ResourceResponse]:
        """Lista recursos da ocorrência, por proximidade quando ``lat``/``lng`` são enviados."""

        resources = container.resource_locator.locate(
            disaster_id,
            lat=_parse_float(lat),
            lng=_parse_float(lng),
            radius_meters=_parse_float(radius),
        )
        return [map_resource(resource) for resource in resources]

    app.include_router(router)


__all__ = ["ResourceResponse", "include_routes", "map_resource"]
