"""Cliente HTTP da API de busca do OpenStreetMap Nominatim."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx

from socorro.domain.errors import ProviderError
from socorro.domain.ports import GeocodingProvider


class NominatimClient(GeocodingProvider):
    """Geocodificação direta de nomes de lugares usando o Nominatim."""

    def __init__(
        self,
        base_url: str,
        *,
        user_agent: str,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        """Configura o cliente HTTP utilizado nas buscas.

        Parameters
        ----------
        base_url:
            URL raiz do serviço Nominatim.
        user_agent:
            Identificação exigida pela política de uso do Nominatim.
        client:
            Cliente HTTP opcional reutilizado por outros componentes.
        timeout:
            Tempo limite aplicado às requisições quando o cliente interno é criado.
        """

        self._base_url = base_url.rstrip("/")
        self._client: httpx.Client = client or httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent},
        )
        self._owns_client: bool = client is None

    def search(self, query: str, *, limit: int = 1) -> Sequence[Mapping[str, Any]]:
        try:
            response = self._client.get(
                "/search",
                params={"q": query, "format": "json", "limit": limit},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ProviderError(f"Falha ao consultar o Nominatim: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Resposta inválida do Nominatim: JSON não pôde ser decodificado") from exc

        if not isinstance(payload, list):
            raise ProviderError("Resposta inesperada do Nominatim: era esperada uma lista")
        return [item for item in payload[:limit] if isinstance(item, Mapping)]

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


__all__ = ["NominatimClient"]
