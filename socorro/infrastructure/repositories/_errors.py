from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from socorro.domain.errors import PersistenceError


@contextmanager
def persistence_errors(operation: str) -> Iterator[None]:
    """Converte erros do driver em :class:`PersistenceError`."""

    try:
        yield
    except PyMongoError as exc:
        raise PersistenceError(f"Falha ao {operation}: {exc}") from exc


def parse_object_id(value: str) -> ObjectId | None:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
