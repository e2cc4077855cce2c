"""Repositórios MongoDB."""
from .indexes import (
    INCIDENT_INDEXES,
    REPORT_INDEXES,
    RESOURCE_INDEXES,
    ensure_indexes,
)
from .mongo_incident_repository import MongoIncidentRepository
from .mongo_report_repository import MongoReportRepository
from .mongo_resource_repository import MongoResourceRepository

__all__ = [
    "INCIDENT_INDEXES",
    "REPORT_INDEXES",
    "RESOURCE_INDEXES",
    "MongoIncidentRepository",
    "MongoReportRepository",
    "MongoResourceRepository",
    "ensure_indexes",
]
