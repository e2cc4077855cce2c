"""Fontes de boletins oficiais consumidas pelo agregador."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Sequence
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from socorro.domain.entities import Bulletin
from socorro.domain.errors import ProviderError
from socorro.domain.ports import BulletinSource

_COLLAPSE_WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)

_DEFAULT_HEADERS = {
    "User-Agent": "SocorroPlatform/1.0 (+bulletins)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9,pt-BR;q=0.8",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StaticBulletinSource(BulletinSource):
    """Boletins fixos usados quando nenhuma página oficial está configurada."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _now

    def fetch(self) -> Sequence[Bulletin]:
        timestamp = self._clock()
        return [
            Bulletin(
                source="FEMA",
                title="Emergency Response Activated",
                content="Federal emergency response activated for NYC flooding",
                url="https://fema.gov/emergency-response",
                timestamp=timestamp,
            ),
            Bulletin(
                source="Red Cross",
                title="Shelter Operations",
                content="Multiple shelters opened across affected areas",
                url="https://redcross.org/shelter-updates",
                timestamp=timestamp,
            ),
        ]


@dataclass(frozen=True)
class BulletinPage:
    """Descreve como extrair boletins de uma página oficial."""

    #: Nome do órgão responsável pela página.
    source: str
    #: Endereço da listagem de atualizações.
    url: str
    #: Seletor CSS de cada item da listagem.
    item_selector: str
    #: Seletor CSS do título (e link) dentro do item.
    title_selector: str = "a"
    #: Seletor CSS opcional do resumo dentro do item.
    content_selector: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BulletinPage":
        try:
            return cls(
                source=str(data["source"]),
                url=str(data["url"]),
                item_selector=str(data["item_selector"]),
                title_selector=str(data.get("title_selector") or "a"),
                content_selector=data.get("content_selector"),
            )
        except KeyError as exc:
            raise ValueError(f"Página de boletins sem o campo obrigatório {exc}") from exc


class ScrapedBulletinSource(BulletinSource):
    """Coleta boletins de páginas oficiais com requests e BeautifulSoup."""

    def __init__(
        self,
        pages: Sequence[BulletinPage],
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._pages = tuple(pages)
        self._session = session or requests.Session()
        self._timeout = timeout
        self._clock = clock or _now
        self._log = logging.getLogger("socorro.bulletins")

    def fetch(self) -> Sequence[Bulletin]:
        bulletins: List[Bulletin] = []
        failures = 0
        for page in self._pages:
            try:
                bulletins.extend(self._collect_page(page))
            except (requests.RequestException, SelectorSyntaxError) as exc:
                failures += 1
                self._log.warning("falha ao coletar boletins de %s: %s", page.url, exc)
        if self._pages and failures == len(self._pages):
            raise ProviderError("Nenhuma página de boletins pôde ser coletada")
        return bulletins

    def _collect_page(self, page: BulletinPage) -> List[Bulletin]:
        self._log.info("GET %s", page.url)
        response = self._session.get(page.url, headers=_DEFAULT_HEADERS, timeout=self._timeout)
        response.raise_for_status()
        soup = BeautifulSoup(response.text, "html.parser")

        timestamp = self._clock()
        collected: List[Bulletin] = []
        for idx, element in enumerate(soup.select(page.item_selector), start=1):
            title_element = element.select_one(page.title_selector)
            if title_element is None:
                self._log.debug("item %d de %s sem título; ignorando", idx, page.url)
                continue
            title = _clean_text(title_element.get_text(" "))
            if not title:
                continue
            href = title_element.get("href") if title_element.name == "a" else None
            content = ""
            if page.content_selector:
                content_element = element.select_one(page.content_selector)
                if content_element is not None:
                    content = _clean_text(content_element.get_text(" "))
            collected.append(
                Bulletin(
                    source=page.source,
                    title=title,
                    content=content,
                    url=urljoin(page.url, href) if href else page.url,
                    timestamp=timestamp,
                )
            )
        self._log.info("%d boletins em %s", len(collected), page.url)
        return collected


def _clean_text(value: str) -> str:
    return _COLLAPSE_WHITESPACE_RE.sub(" ", value).strip()


__all__ = [
    "BulletinPage",
    "ScrapedBulletinSource",
    "StaticBulletinSource",
]
