"""Rotas HTTP do enriquecimento geográfico."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from socorro.domain.errors import LocationNotFound

if TYPE_CHECKING:
    from socorro.container import SocorroContainer


class GeocodeRequest(BaseModel):
    """Texto livre do qual a localização será extraída."""

    text: str


class CoordinatesResponse(BaseModel):
    lat: float
    lng: float


class GeocodeResponse(BaseModel):
    """Nome do local extraído e suas coordenadas."""

    #: Nome do local retornado pelo extrator.
    locationName: str
    #: Coordenadas resolvidas pelo geocodificador.
    coordinates: CoordinatesResponse


def include_routes(app: FastAPI, container: "SocorroContainer", *, prefix: str = "") -> None:
    """Registra a rota ``POST /geocode``."""

    router = APIRouter(prefix=prefix, tags=["Geocodificação"])

    @router.post(
        "/geocode",
        response_model=GeocodeResponse,
        responses={400: {"description": "Localização não encontrada"}},
    )
    def geocode(payload: GeocodeRequest):
        try:
            result = container.geocode_orchestrator.resolve(payload.text)
        except LocationNotFound as exc:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        return GeocodeResponse(**result.to_mapping())

    app.include_router(router)


__all__ = [
    "CoordinatesResponse",
    "GeocodeRequest",
    "GeocodeResponse",
    "include_routes",
]
