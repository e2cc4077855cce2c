"""Utilitários para criação de índices das coleções do Socorro."""
from __future__ import annotations

import logging
from typing import Any

from pymongo.collection import Collection
from pymongo.errors import OperationFailure

log = logging.getLogger(__name__)

# IndexOptionsConflict / IndexKeySpecsConflict
_EXISTING_INDEX_CODES = {85, 86}

IndexDefinition = tuple[list[tuple[str, Any]], dict[str, object]]

INCIDENT_INDEXES: tuple[IndexDefinition, ...] = (
    ([("created_at", -1)], {"name": "created_at_desc", "background": True}),
    ([("tags", 1)], {"name": "tags", "background": True}),
)

REPORT_INDEXES: tuple[IndexDefinition, ...] = (
    (
        [("disaster_id", 1), ("created_at", -1)],
        {"name": "disaster_created_at", "background": True},
    ),
    (
        [("image_url", 1)],
        {
            "name": "image_url",
            "background": True,
            "partialFilterExpression": {"image_url": {"$type": "string"}},
        },
    ),
)

RESOURCE_INDEXES: tuple[IndexDefinition, ...] = (
    ([("disaster_id", 1)], {"name": "disaster_id", "background": True}),
    ([("location", "2dsphere")], {"name": "location_2dsphere", "background": True}),
)


def ensure_indexes(collection: Collection, definitions: tuple[IndexDefinition, ...]) -> None:
    """Garante que os índices informados existam, tolerando conflitos de nome."""

    for keys, options in definitions:
        try:
            collection.create_index(keys, **options)
        except OperationFailure as exc:
            if exc.code not in _EXISTING_INDEX_CODES:
                raise
            log.debug("Índice %s já existe com outra definição: %s", options.get("name"), exc)


__all__ = [
    "INCIDENT_INDEXES",
    "REPORT_INDEXES",
    "RESOURCE_INDEXES",
    "ensure_indexes",
]
