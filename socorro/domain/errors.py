"""Hierarquia de erros compartilhada pelos serviços do Socorro."""
from __future__ import annotations


class SocorroError(Exception):
    """Erro base da aplicação."""


class NotFoundError(SocorroError):
    """Recurso ou informação solicitada não pôde ser encontrada."""


class LocationNotFound(NotFoundError):
    """Nenhuma localização pôde ser extraída ou geocodificada a partir do texto."""

    def __init__(self, message: str, *, stage: str) -> None:
        super().__init__(message)
        self.stage = stage


class IncidentNotFound(NotFoundError):
    def __init__(self, incident_id: str) -> None:
        super().__init__(f"Disaster {incident_id} not found")
        self.incident_id = incident_id


class ProviderError(SocorroError):
    """Falha ao consultar um provedor externo (IA, geocodificação, boletins)."""


class PersistenceError(SocorroError):
    """Falha reportada pela camada de persistência."""


__all__ = [
    "IncidentNotFound",
    "LocationNotFound",
    "NotFoundError",
    "PersistenceError",
    "ProviderError",
    "SocorroError",
]
