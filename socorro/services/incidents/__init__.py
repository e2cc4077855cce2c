"""Ocorrências, relatos e sinais sociais."""
from .service import IncidentService, ReportService, SocialSignalService

__all__ = ["IncidentService", "ReportService", "SocialSignalService"]
