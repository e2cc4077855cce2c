"""Cliente HTTP da API REST ``generateContent`` do Gemini."""
from __future__ import annotations

from typing import Any

import httpx

from socorro.domain.errors import ProviderError
from socorro.domain.ports import TextGenerationProvider


class GeminiClient(TextGenerationProvider):
    """Envia instruções de texto ao Gemini e devolve o primeiro candidato."""

    def __init__(
        self,
        api_url: str,
        *,
        api_key: str | None,
        model: str,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._api_key = api_key
        self._model = model
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)
        self._owns_client: bool = client is None

    def generate(self, prompt: str) -> str | None:
        if not self._api_key:
            raise ProviderError("GEMINI_API_KEY não configurada")

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self._client.post(
                f"{self._api_url}/{self._model}:generateContent",
                params={"key": self._api_key},
                json=body,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ProviderError(f"Falha ao consultar o Gemini: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Resposta inválida do Gemini: JSON não pôde ser decodificado") from exc

        text = _first_candidate_text(payload)
        if text is None:
            return None
        return text.strip() or None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def _first_candidate_text(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


__all__ = ["GeminiClient"]
