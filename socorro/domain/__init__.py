"""Domínio do Socorro: entidades, contratos e erros."""
from .entities import (
    AuditEntry,
    Bulletin,
    Coordinates,
    GeocodeResult,
    Incident,
    Report,
    Resource,
    SocialPost,
    VerificationResult,
    VerificationStatus,
)

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
]
