"""Extração do nome de local mais específico citado em um texto livre."""
from __future__ import annotations

import logging

from socorro.domain.errors import ProviderError
from socorro.domain.ports import CacheStore, TextGenerationProvider

CACHE_PREFIX = "extract_location_"

_NO_LOCATION_ANSWER = "NONE"

_PROMPT_TEMPLATE = (
    "Extract the most specific location name from this text. "
    "Return only the location name (city, state/country format preferred). "
    f"If the text mentions no location, return {_NO_LOCATION_ANSWER}: \"{{text}}\""
)


def cache_key(text: str) -> str:
    return f"{CACHE_PREFIX}{text}"


class LocationExtractor:
    """Usa um modelo de linguagem para extrair locais, com cache pelo texto integral."""

    def __init__(
        self,
        cache: CacheStore,
        provider: TextGenerationProvider,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cache = cache
        self._provider = provider
        self._log = logger or logging.getLogger("socorro.location_extractor")

    def extract(self, text: str) -> str | None:
        if not text or not text.strip():
            return None

        key = cache_key(text)
        cached = self._cache.get(key)
        if isinstance(cached, str) and cached:
            return cached

        try:
            answer = self._provider.generate(_PROMPT_TEMPLATE.format(text=text))
        except ProviderError as exc:
            self._log.error("Falha ao extrair localização: %s", exc)
            return None

        location_name = _clean_answer(answer)
        if location_name is None:
            self._log.info("Modelo não retornou localização para o texto informado")
            return None

        self._cache.set(key, location_name)
        return location_name


def _clean_answer(answer: str | None) -> str | None:
    if answer is None:
        return None
    cleaned = answer.strip()
    if not cleaned or cleaned.strip(".").upper() == _NO_LOCATION_ANSWER:
        return None
    return cleaned


__all__ = ["CACHE_PREFIX", "LocationExtractor", "cache_key"]
