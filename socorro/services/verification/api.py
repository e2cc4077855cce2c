"""Rotas HTTP da verificação de imagens."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel

if TYPE_CHECKING:
    from socorro.container import SocorroContainer


class VerifyImageRequest(BaseModel):
    image_url: str


class VerificationResponse(BaseModel):
    """Resultado da análise de autenticidade."""

    score: int
    reasoning: str
    status: str


def include_routes(app: FastAPI, container: "SocorroContainer", *, prefix: str = "") -> None:
    router = APIRouter(prefix=prefix, tags=["Verificação"])

    @router.post(
        "/disasters/{disaster_id}/verify-image", response_model=VerificationResponse
    )
    def verify_image(disaster_id: str, payload: VerifyImageRequest) -> VerificationResponse:
        """Avalia a imagem e atualiza todos os relatos que a compartilham."""

        result = container.image_verifier.verify(payload.image_url)
        return VerificationResponse(**result.to_mapping())

    app.include_router(router)


__all__ = ["VerificationResponse", "VerifyImageRequest", "include_routes"]
