"""Testes dos repositórios MongoDB com coleções em memória."""
from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from socorro.domain.entities import Coordinates, Report, VerificationStatus
from socorro.domain.errors import PersistenceError
from socorro.domain.repositories import IncidentRepository
from socorro.infrastructure.repositories import (
    MongoIncidentRepository,
    MongoReportRepository,
    MongoResourceRepository,
)

_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_set_status_by_image_updates_every_matching_report(collection_factory) -> None:
    collection = collection_factory(
        [
            {"_id": ObjectId(), "disaster_id": "d1", "image_url": "https://a/1.jpg"},
            {"_id": ObjectId(), "disaster_id": "d2", "image_url": "https://a/1.jpg"},
            {"_id": ObjectId(), "disaster_id": "d1", "image_url": "https://a/2.jpg"},
        ]
    )
    repository = MongoReportRepository(collection)

    updated = repository.set_status_by_image("https://a/1.jpg", VerificationStatus.VERIFIED)

    assert updated == 2
    assert [doc.get("verification_status") for doc in collection.documents] == [
        "verified",
        "verified",
        None,
    ]


def test_report_with_unknown_status_is_read_as_pending(collection_factory) -> None:
    collection = collection_factory(
        [{"_id": ObjectId(), "disaster_id": "d1", "user_id": "u", "verification_status": "??"}]
    )

    (report,) = MongoReportRepository(collection).list_by_disaster("d1")

    assert report.verification_status is VerificationStatus.PENDING


def test_report_insert_failure_becomes_persistence_error() -> None:
    collection = MagicMock()
    collection.insert_one.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(PersistenceError):
        MongoReportRepository(collection).add(
            Report(disaster_id="d1", user_id="u", content="x", created_at=_NOW)
        )


def test_resource_listing_reads_geojson_location(collection_factory) -> None:
    collection = collection_factory(
        [
            {
                "_id": ObjectId(),
                "disaster_id": "d1",
                "name": "Abrigo",
                "type": "shelter",
                "location": {"type": "Point", "coordinates": [-73.97, 40.78]},
            },
            {"_id": ObjectId(), "disaster_id": "d2", "name": "Outro"},
        ]
    )

    (resource,) = MongoResourceRepository(collection).list_by_disaster("d1")

    assert resource.name == "Abrigo"
    assert resource.coordinates == Coordinates(lat=40.78, lng=-73.97)
    assert resource.distance_meters is None


def test_find_nearby_runs_geo_near_pipeline() -> None:
    collection = MagicMock()
    collection.aggregate.return_value = [
        {"_id": "r1", "disaster_id": "d1", "name": "Abrigo", "distance_meters": 42.5}
    ]

    (resource,) = MongoResourceRepository(collection).find_nearby("d1", 40.78, -73.97, 1000.0)

    (pipeline,), _ = collection.aggregate.call_args
    stage = pipeline[0]["$geoNear"]
    assert stage["near"] == {"type": "Point", "coordinates": [-73.97, 40.78]}
    assert stage["maxDistance"] == 1000.0
    assert stage["query"] == {"disaster_id": "d1"}
    assert resource.distance_meters == 42.5


def test_find_nearby_propagates_driver_errors() -> None:
    collection = MagicMock()
    collection.aggregate.side_effect = OperationFailure("no geo index", code=291)

    with pytest.raises(OperationFailure):
        MongoResourceRepository(collection).find_nearby("d1", 0.0, 0.0, 10.0)


def test_incident_with_undated_audit_entry_still_serializes(collection_factory) -> None:
    collection = collection_factory(
        [
            {
                "_id": ObjectId(),
                "title": "Enchente antiga",
                "owner_id": "netrunnerX",
                "audit_trail": [
                    {"action": "create", "user_id": "netrunnerX"},
                    {"action": "update", "user_id": "admin", "timestamp": "ontem"},
                    {"action": "update", "user_id": "admin", "timestamp": _NOW},
                ],
                "created_at": _NOW,
            }
        ]
    )

    (incident,) = MongoIncidentRepository(collection).list()

    assert [entry["timestamp"] for entry in incident.to_mapping()["audit_trail"]] == [
        None,
        None,
        _NOW.isoformat(),
    ]


def test_incident_repository_contract_has_no_single_lookup() -> None:
    assert IncidentRepository.__abstractmethods__ == frozenset(
        {"add", "list", "update", "delete"}
    )
    assert not hasattr(MongoIncidentRepository, "get")
