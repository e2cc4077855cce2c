from __future__ import annotations

import logging
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from rich.console import Console

from socorro import cli
from socorro.domain.entities import (
    Bulletin,
    Coordinates,
    GeocodeResult,
    Resource,
    VerificationResult,
    VerificationStatus,
)
from socorro.domain.errors import LocationNotFound, PersistenceError
from socorro.settings import get_log_level


class _Container:
    def __init__(self, **services) -> None:
        self.closed = False
        for name, service in services.items():
            setattr(self, name, service)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _noop_load_dotenv(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)


def _install(monkeypatch, container: _Container) -> _Container:
    monkeypatch.setattr(cli, "build_container", lambda: container)
    return container


def test_geocode_prints_result_and_closes_container(monkeypatch, capsys) -> None:
    result = GeocodeResult("Manhattan, NYC", Coordinates(lat=40.78, lng=-73.97))
    container = _install(
        monkeypatch,
        _Container(geocode_orchestrator=SimpleNamespace(resolve=lambda text: result)),
    )

    exit_code = cli.main(["geocode", "Flooding near Manhattan, NYC"])

    assert exit_code == 0
    assert "Manhattan, NYC" in capsys.readouterr().out
    assert container.closed


def test_geocode_without_location_returns_error_code(monkeypatch, capsys) -> None:
    def resolve(text):
        raise LocationNotFound("Could not extract location", stage="extract")

    _install(monkeypatch, _Container(geocode_orchestrator=SimpleNamespace(resolve=resolve)))

    assert cli.main(["geocode", "nada"]) == 1
    assert "Could not extract location" in capsys.readouterr().out


def test_verify_image_prints_verification(monkeypatch, capsys) -> None:
    verification = VerificationResult(8, "Looks genuine", VerificationStatus.VERIFIED)
    _install(
        monkeypatch,
        _Container(image_verifier=SimpleNamespace(verify=lambda url: verification)),
    )

    assert cli.main(["verify-image", "https://x/y.jpg"]) == 0
    assert '"verified"' in capsys.readouterr().out


def test_official_updates_renders_table(monkeypatch, capsys) -> None:
    bulletin = Bulletin(
        source="FEMA",
        title="Shelters",
        content="",
        url="https://fema.gov",
        timestamp=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )
    _install(
        monkeypatch,
        _Container(bulletin_aggregator=SimpleNamespace(fetch=lambda: [bulletin])),
    )

    assert cli.main(["official-updates"]) == 0
    assert "FEMA" in capsys.readouterr().out


def test_resources_forwards_coordinates(monkeypatch, capsys) -> None:
    calls = []

    def locate(disaster_id, **kwargs):
        calls.append((disaster_id, kwargs))
        return [Resource(id="r1", disaster_id=disaster_id, name="Abrigo", distance_meters=12.0)]

    _install(monkeypatch, _Container(resource_locator=SimpleNamespace(locate=locate)))

    assert cli.main(["resources", "d1", "--lat", "40.7", "--lng", "-73.9"]) == 0
    assert calls == [("d1", {"lat": 40.7, "lng": -73.9, "radius_meters": None})]
    assert "Abrigo" in capsys.readouterr().out


def test_persistence_error_returns_error_code(monkeypatch, capsys) -> None:
    def locate(disaster_id, **kwargs):
        raise PersistenceError("Falha ao listar recursos")

    container = _install(
        monkeypatch, _Container(resource_locator=SimpleNamespace(locate=locate))
    )

    assert cli.main(["resources", "d1"]) == 1
    assert "Falha ao listar recursos" in capsys.readouterr().out
    assert container.closed


def test_ensure_indexes_uses_database_factory(monkeypatch, capsys) -> None:
    created = []

    class _Factory:
        def get_database(self):
            return "db"

        def close(self):
            created.append("closed")

    def ensure(database):
        created.append(database)
        return ["disasters", "cache"]

    monkeypatch.setattr(cli, "MongoClientFactory", _Factory)
    monkeypatch.setattr(cli, "ensure_database_indexes", ensure)

    assert cli.main(["ensure-indexes"]) == 0
    assert created == ["db", "closed"]
    assert "disasters, cache" in capsys.readouterr().out


def test_log_level_defaults_to_environment_setting(monkeypatch) -> None:
    monkeypatch.setenv("SOCORRO_LOG_LEVEL", "debug")
    get_log_level.cache_clear()
    try:
        cli.configure_logging(Console(), None)
        assert logging.getLogger().level == logging.DEBUG

        cli.configure_logging(Console(), "warning")
        assert logging.getLogger().level == logging.WARNING
    finally:
        get_log_level.cache_clear()
