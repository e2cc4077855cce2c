from __future__ import annotations

import pytest

from socorro.domain.entities import Coordinates, GeocodeResult
from socorro.domain.errors import LocationNotFound
from socorro.infrastructure.cache import MemoryCacheStore
from socorro.services.enrichment import GeocodeOrchestrator, Geocoder, LocationExtractor


class _CountingModel:
    def __init__(self, answers: dict[str, str | None]) -> None:
        self._answers = answers
        self.calls = 0

    def generate(self, prompt: str) -> str | None:
        self.calls += 1
        for text, answer in self._answers.items():
            if text in prompt:
                return answer
        return None


class _CountingGeocoding:
    def __init__(self, places: dict[str, tuple[float, float]]) -> None:
        self._places = places
        self.calls = 0

    def search(self, query: str, *, limit: int = 1):
        self.calls += 1
        if query not in self._places:
            return []
        lat, lng = self._places[query]
        return [{"lat": str(lat), "lon": str(lng)}]


class _RecordingCache(MemoryCacheStore):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.writes: list[str] = []

    def set(self, key, value, ttl=None):
        self.writes.append(key)
        return super().set(key, value, ttl)


@pytest.fixture
def cache(clock):
    return _RecordingCache(clock=clock)


def _build(cache, model, geocoding):
    return GeocodeOrchestrator(LocationExtractor(cache, model), Geocoder(cache, geocoding))


def test_flooding_scenario_resolves_and_repeats_without_provider_calls(cache) -> None:
    model = _CountingModel({"Flooding near Manhattan, NYC": "Manhattan, NYC"})
    geocoding = _CountingGeocoding({"Manhattan, NYC": (40.7831, -73.9712)})
    orchestrator = _build(cache, model, geocoding)

    first = orchestrator.resolve("Flooding near Manhattan, NYC")
    second = orchestrator.resolve("Flooding near Manhattan, NYC")

    expected = GeocodeResult(
        location_name="Manhattan, NYC",
        coordinates=Coordinates(lat=40.7831, lng=-73.9712),
    )
    assert first == expected
    assert second == expected
    assert (model.calls, geocoding.calls) == (1, 1)


def test_different_texts_share_geocoding_by_place_name(cache) -> None:
    model = _CountingModel(
        {"Alagamento em Manhattan": "Manhattan, NYC", "Queda de energia em Manhattan": "Manhattan, NYC"}
    )
    geocoding = _CountingGeocoding({"Manhattan, NYC": (40.78, -73.97)})
    orchestrator = _build(cache, model, geocoding)

    orchestrator.resolve("Alagamento em Manhattan")
    orchestrator.resolve("Queda de energia em Manhattan")

    assert model.calls == 2
    assert geocoding.calls == 1


def test_no_extractable_location_is_not_found_without_cache_writes(cache) -> None:
    model = _CountingModel({})
    geocoding = _CountingGeocoding({})
    orchestrator = _build(cache, model, geocoding)

    with pytest.raises(LocationNotFound) as excinfo:
        orchestrator.resolve("socorro, precisamos de ajuda")

    assert excinfo.value.stage == "extract"
    assert geocoding.calls == 0
    assert cache.writes == []


def test_ungeocodable_place_is_not_found(cache) -> None:
    model = _CountingModel({"perto de Xyzzy": "Xyzzy"})
    geocoding = _CountingGeocoding({})
    orchestrator = _build(cache, model, geocoding)

    with pytest.raises(LocationNotFound) as excinfo:
        orchestrator.resolve("Incêndio perto de Xyzzy")

    assert excinfo.value.stage == "geocode"
    assert cache.writes == ["extract_location_Incêndio perto de Xyzzy"]
