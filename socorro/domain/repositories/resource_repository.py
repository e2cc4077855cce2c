"""Contrato de consulta de recursos de ajuda."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from socorro.domain.entities import Resource


class ResourceRepository(ABC):
    """Define a varredura filtrada e a busca geoespacial de recursos."""

    @abstractmethod
    def list_by_disaster(self, disaster_id: str) -> Iterable[Resource]:
        """Listar os recursos da ocorrência na ordem padrão da persistência."""

    def find_nearby(
        self, disaster_id: str, lat: float, lng: float, radius_meters: float
    ) -> Iterable[Resource]:
        """Buscar recursos dentro do raio, ordenados por distância.

        Implementações sem suporte geoespacial podem manter o comportamento
        padrão, que sinaliza a ausência da consulta especializada.
        """

        raise NotImplementedError("Busca por proximidade não suportada")
