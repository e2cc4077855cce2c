"""Ponto de entrada REST/WebSocket que agrega os serviços do Socorro."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from socorro.container import SocorroContainer, build_container
from socorro.domain.errors import NotFoundError, PersistenceError
from socorro.services.bulletins.api import include_routes as include_bulletin_routes
from socorro.services.enrichment.api import include_routes as include_enrichment_routes
from socorro.services.incidents.api import include_routes as include_incident_routes
from socorro.services.realtime.api import include_routes as include_realtime_routes
from socorro.services.resources.api import include_routes as include_resource_routes
from socorro.services.verification.api import include_routes as include_verification_routes
from socorro.settings import get_api_bind_host, get_api_port

log = logging.getLogger(__name__)


def configure_cors(app: FastAPI, origins: list[str] | None = None) -> None:
    """Configura o CORS padrão utilizado pelos serviços do Socorro."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def configure_error_handlers(app: FastAPI) -> None:
    """Traduz erros de domínio em respostas ``{"error": ...}``."""

    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    async def handle_persistence(request: Request, exc: PersistenceError) -> JSONResponse:
        log.error("Erro de persistência em %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Persistence failure"})

    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(PersistenceError, handle_persistence)


def create_app(container: SocorroContainer | None = None) -> FastAPI:
    """Cria a aplicação FastAPI com todas as rotas configuradas."""

    owns_container = container is None
    container = container or build_container()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_container:
            container.close()

    app = FastAPI(
        title="Socorro API",
        version="1.0.0",
        description=(
            "Coordenação de ocorrências com enriquecimento geográfico, verificação "
            "de imagens, boletins oficiais e difusão em tempo real."
        ),
        lifespan=lifespan,
    )
    app.state.container = container
    configure_cors(app, container.settings.cors_origins)
    configure_error_handlers(app)
    include_enrichment_routes(app, container)
    include_incident_routes(app, container)
    include_resource_routes(app, container)
    include_verification_routes(app, container)
    include_bulletin_routes(app, container)
    include_realtime_routes(app, container)
    return app


def run() -> None:
    """Executa a API utilizando o Uvicorn."""

    load_dotenv()
    uvicorn.run(
        "socorro.api:create_app",
        host=get_api_bind_host(),
        port=get_api_port(),
        factory=True,
    )


__all__ = ["configure_cors", "configure_error_handlers", "create_app", "run"]
