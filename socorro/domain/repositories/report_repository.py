"""Contrato de persistência para relatos de campo."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from socorro.domain.entities import Report, VerificationStatus


class ReportRepository(ABC):
    """Define operações de armazenamento de relatos."""

    @abstractmethod
    def add(self, report: Report) -> Report:
        """Persistir um relato e retorná-lo com identificador."""

    @abstractmethod
    def list_by_disaster(self, disaster_id: str) -> Iterable[Report]:
        """Listar relatos de uma ocorrência do mais recente ao mais antigo."""

    @abstractmethod
    def set_status_by_image(self, image_url: str, status: VerificationStatus) -> int:
        """Atualizar todos os relatos com ``image_url``; retorna a quantidade alterada."""
