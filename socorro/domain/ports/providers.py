"""Portas de saída para provedores externos lentos."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from socorro.domain.entities import Bulletin, SocialPost


class GeocodingProvider(ABC):
    """Geocodificação direta de nomes de lugares."""

    @abstractmethod
    def search(self, query: str, *, limit: int = 1) -> Sequence[Mapping[str, Any]]:
        """Retornar até ``limit`` correspondências com ``lat``/``lon``.

        Erros de transporte ou do provedor devem ser levantados como
        :class:`socorro.domain.errors.ProviderError`.
        """


class TextGenerationProvider(ABC):
    """Modelo de linguagem que responde a uma instrução em texto."""

    @abstractmethod
    def generate(self, prompt: str) -> str | None:
        """Retornar o texto gerado ou ``None`` quando não houver candidato."""


class BulletinSource(ABC):
    """Fonte dos boletins oficiais agregados."""

    @abstractmethod
    def fetch(self) -> Sequence[Bulletin]:
        """Coletar os boletins disponíveis."""


class SocialFeed(ABC):
    """Fonte de publicações de redes sociais."""

    @abstractmethod
    def fetch(self, disaster_id: str) -> Sequence[SocialPost]:
        """Coletar as publicações associadas à ocorrência."""
