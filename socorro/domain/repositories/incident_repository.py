"""Contrato de persistência para ocorrências."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional

from socorro.domain.entities import AuditEntry, Incident


class IncidentRepository(ABC):
    """Define operações de armazenamento e consulta de ocorrências."""

    @abstractmethod
    def add(self, incident: Incident) -> Incident:
        """Persistir uma nova ocorrência e retorná-la com identificador."""

    @abstractmethod
    def list(self, *, tag: str | None = None) -> Iterable[Incident]:
        """Listar ocorrências da mais recente para a mais antiga."""

    @abstractmethod
    def update(
        self, incident_id: str, changes: Mapping[str, Any], audit: AuditEntry
    ) -> Optional[Incident]:
        """Aplicar ``changes`` e anexar ``audit`` na mesma escrita.

        Retorna ``None`` quando a ocorrência não existir.
        """

    @abstractmethod
    def delete(self, incident_id: str) -> bool:
        """Remover a ocorrência; ``False`` quando não existir."""
