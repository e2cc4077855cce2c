"""Entidades de domínio utilizadas pelo enriquecimento de ocorrências."""
from .coordinates import Coordinates, GeocodeResult
from .incident import AuditEntry, Incident, normalize_tags
from .report import Report, VerificationResult, VerificationStatus
from .resource import Resource
from .signals import Bulletin, SocialPost

__all__ = [
    "AuditEntry",
    "Bulletin",
    "Coordinates",
    "GeocodeResult",
    "Incident",
    "Report",
    "Resource",
    "SocialPost",
    "VerificationResult",
    "VerificationStatus",
    "normalize_tags",
]
