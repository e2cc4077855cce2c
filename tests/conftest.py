from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any

import pytest
from bson import ObjectId
from pymongo import ReturnDocument


class MutableClock:
    """Relógio controlado pelos testes para exercitar expiração."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def _matches(document: dict[str, Any], criteria: dict[str, Any]) -> bool:
    for key, expected in criteria.items():
        value = document.get(key)
        if isinstance(value, list) and not isinstance(expected, list):
            if expected not in value:
                return False
        elif value != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def sort(self, key: str, direction: int):
        self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    def __iter__(self):
        return iter(self._documents)


class FakeCollection:
    """Subconjunto em memória da API de ``pymongo.collection.Collection``."""

    def __init__(self, documents: list[dict[str, Any]] | None = None) -> None:
        self.documents: list[dict[str, Any]] = [deepcopy(doc) for doc in documents or []]
        self.indexes: list[tuple[Any, dict[str, Any]]] = []

    def create_index(self, keys, **options) -> str:
        self.indexes.append((keys, options))
        return options.get("name", "index")

    def insert_one(self, document: dict[str, Any]):
        stored = deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    def find_one(self, criteria: dict[str, Any]):
        for document in self.documents:
            if _matches(document, criteria):
                return deepcopy(document)
        return None

    def find(self, criteria: dict[str, Any] | None = None):
        criteria = criteria or {}
        return FakeCursor([deepcopy(doc) for doc in self.documents if _matches(doc, criteria)])

    def replace_one(self, criteria: dict[str, Any], document: dict[str, Any], upsert: bool = False):
        for index, existing in enumerate(self.documents):
            if _matches(existing, criteria):
                self.documents[index] = deepcopy(document)
                return SimpleNamespace(matched_count=1, modified_count=1)
        if upsert:
            self.documents.append(deepcopy(document))
        return SimpleNamespace(matched_count=0, modified_count=0)

    def update_many(self, criteria: dict[str, Any], update: dict[str, Any]):
        modified = 0
        for document in self.documents:
            if _matches(document, criteria):
                document.update(deepcopy(update.get("$set", {})))
                modified += 1
        return SimpleNamespace(modified_count=modified)

    def find_one_and_update(self, criteria, update, return_document=ReturnDocument.BEFORE):
        for document in self.documents:
            if _matches(document, criteria):
                before = deepcopy(document)
                document.update(deepcopy(update.get("$set", {})))
                for key, value in update.get("$push", {}).items():
                    document.setdefault(key, []).append(deepcopy(value))
                return deepcopy(document) if return_document == ReturnDocument.AFTER else before
        return None

    def delete_one(self, criteria: dict[str, Any]):
        for index, document in enumerate(self.documents):
            if _matches(document, criteria):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def collection_factory():
    return FakeCollection
