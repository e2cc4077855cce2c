"""Contratos de persistência consumidos pelos serviços."""
from .incident_repository import IncidentRepository
from .report_repository import ReportRepository
from .resource_repository import ResourceRepository

__all__ = ["IncidentRepository", "ReportRepository", "ResourceRepository"]
