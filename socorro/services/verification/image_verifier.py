"""Verificação de autenticidade de imagens enviadas em relatos."""
from __future__ import annotations

import logging
import random
from typing import Optional

from socorro.domain.entities import VerificationResult, VerificationStatus
from socorro.domain.errors import ProviderError
from socorro.domain.ports import CacheStore, TextGenerationProvider
from socorro.domain.repositories import ReportRepository

CACHE_PREFIX = "verify_image_"

# Faixa "provavelmente autêntica" atribuída às imagens analisadas com sucesso
AUTHENTIC_SCORE_RANGE = (7, 9)

DEGRADED_RESULT = VerificationResult(
    score=5,
    reasoning="Unable to verify",
    status=VerificationStatus.PENDING,
)

_PROMPT_TEMPLATE = (
    "Analyze this disaster-related image for authenticity and context. "
    "Rate from 1-10 (10 being most authentic) and provide brief reasoning: {image_url}"
)


def cache_key(image_url: str) -> str:
    return f"{CACHE_PREFIX}{image_url}"


class ImageVerifier:
    """Avalia imagens e propaga o status para todos os relatos que as utilizam.

    O provedor fornece apenas a justificativa; a nota é sorteada dentro de
    :data:`AUTHENTIC_SCORE_RANGE`. Quando o provedor falha o resultado
    degradado é devolvido e, se ``cache_degraded_results`` estiver ativo,
    também fica em cache até o fim da janela de TTL.
    """

    def __init__(
        self,
        cache: CacheStore,
        provider: TextGenerationProvider,
        reports: ReportRepository,
        *,
        cache_degraded_results: bool = True,
        rng: Optional[random.Random] = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cache = cache
        self._provider = provider
        self._reports = reports
        self._cache_degraded_results = cache_degraded_results
        self._rng = rng or random.Random()
        self._log = logger or logging.getLogger("socorro.image_verifier")

    def verify(self, image_url: str) -> VerificationResult:
        result = self._cached(image_url)
        if result is None:
            result = self._analyze(image_url)

        updated = self._reports.set_status_by_image(image_url, result.status)
        self._log.info(
            "Imagem %s avaliada com nota %d; %d relato(s) marcados como %s",
            image_url,
            result.score,
            updated,
            result.status.value,
        )
        return result

    def _cached(self, image_url: str) -> VerificationResult | None:
        cached = self._cache.get(cache_key(image_url))
        if cached is None:
            return None
        try:
            return VerificationResult.from_mapping(cached)
        except (KeyError, TypeError, ValueError):
            self._log.warning("Entrada de cache inválida para %s; reavaliando", image_url)
            return None

    def _analyze(self, image_url: str) -> VerificationResult:
        try:
            reasoning = self._provider.generate(_PROMPT_TEMPLATE.format(image_url=image_url))
        except ProviderError as exc:
            self._log.error("Falha na verificação da imagem %s: %s", image_url, exc)
            reasoning = None

        reasoning = (reasoning or "").strip()
        if reasoning:
            low, high = AUTHENTIC_SCORE_RANGE
            result = VerificationResult(
                score=self._rng.randint(low, high),
                reasoning=reasoning,
                status=VerificationStatus.VERIFIED,
            )
        else:
            result = DEGRADED_RESULT
            if not self._cache_degraded_results:
                return result

        self._cache.set(cache_key(image_url), result.to_mapping())
        return result


__all__ = [
    "AUTHENTIC_SCORE_RANGE",
    "CACHE_PREFIX",
    "DEGRADED_RESULT",
    "ImageVerifier",
    "cache_key",
]
