"""Testes da coleta de boletins em páginas oficiais."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict

import pytest
import requests

from socorro.domain.errors import ProviderError
from socorro.infrastructure.bulletins import (
    BulletinPage,
    ScrapedBulletinSource,
    StaticBulletinSource,
)

_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

_LISTING = """
<html><body>
  <ul class="updates">
    <li class="update"><a href="/news/1">  Emergency   Declaration </a><p>Aid approved</p></li>
    <li class="update"><span>sem link</span></li>
    <li class="update"><a href="https://other.example/2">Shelters open</a></li>
  </ul>
</body></html>
"""


class _DummyResponse:
    def __init__(self, url: str, text: str, status_code: int = 200) -> None:
        self.url = url
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code} para {self.url}")


class _DummySession:
    def __init__(self, responses: Dict[str, _DummyResponse]) -> None:
        self._responses = responses
        self.calls: list[str] = []

    def get(self, url: str, headers: dict | None = None, timeout: float | None = None):
        self.calls.append(url)
        if url not in self._responses:
            raise requests.ConnectionError(f"URL inesperada: {url}")
        return self._responses[url]


@pytest.fixture
def page() -> BulletinPage:
    return BulletinPage.from_mapping(
        {
            "source": "FEMA",
            "url": "https://fema.example/updates",
            "item_selector": "li.update",
            "content_selector": "p",
        }
    )


def test_scraper_extracts_titles_links_and_summaries(page) -> None:
    session = _DummySession({page.url: _DummyResponse(page.url, _LISTING)})
    source = ScrapedBulletinSource([page], session=session, clock=lambda: _NOW)

    bulletins = source.fetch()

    assert [(item.title, item.url, item.content) for item in bulletins] == [
        ("Emergency Declaration", "https://fema.example/news/1", "Aid approved"),
        ("Shelters open", "https://other.example/2", ""),
    ]
    assert {item.source for item in bulletins} == {"FEMA"}
    assert {item.timestamp for item in bulletins} == {_NOW}


def test_one_failing_page_keeps_the_others(page) -> None:
    broken = BulletinPage(source="Red Cross", url="https://rc.example/", item_selector="li")
    session = _DummySession(
        {
            page.url: _DummyResponse(page.url, _LISTING),
            broken.url: _DummyResponse(broken.url, "", status_code=500),
        }
    )

    bulletins = ScrapedBulletinSource([broken, page], session=session).fetch()

    assert len(bulletins) == 2
    assert session.calls == [broken.url, page.url]


def test_all_pages_failing_raises_provider_error(page) -> None:
    source = ScrapedBulletinSource([page], session=_DummySession({}))

    with pytest.raises(ProviderError):
        source.fetch()


def test_page_definition_requires_item_selector() -> None:
    with pytest.raises(ValueError):
        BulletinPage.from_mapping({"source": "FEMA", "url": "https://x"})


def test_static_source_returns_fema_and_red_cross() -> None:
    bulletins = StaticBulletinSource(clock=lambda: _NOW).fetch()

    assert [item.source for item in bulletins] == ["FEMA", "Red Cross"]
