"""Entidade que representa uma ocorrência (desastre) coordenada pela plataforma."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Tuple

from .coordinates import Coordinates


@dataclass(frozen=True)
class AuditEntry:
    """Registro de auditoria anexado a cada mutação da ocorrência."""

    action: str
    user_id: str
    #: Momento da mutação; ausente em registros legados sem data.
    timestamp: Optional[datetime]

    def to_mapping(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "user_id": self.user_id,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AuditEntry":
        return cls(
            action=str(data.get("action", "")),
            user_id=str(data.get("user_id", "")),
            timestamp=_parse_timestamp(data.get("timestamp")),
        )


@dataclass(frozen=True)
class Incident:
    """Ocorrência registrada com localização e trilha de auditoria."""

    #: Título curto exibido nas listagens.
    title: str
    #: Identificador do responsável pelo registro.
    owner_id: str
    #: Identificador atribuído pela persistência; ``None`` antes da inserção.
    id: Optional[str] = None
    #: Nome livre do local informado pelo usuário.
    location_name: Optional[str] = None
    #: Coordenadas resolvidas para ``location_name``, quando encontradas.
    coordinates: Optional[Coordinates] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    #: Trilha de auditoria somente-anexação.
    audit_trail: Tuple[AuditEntry, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None

    def with_audit(self, action: str, user_id: str, timestamp: datetime) -> "Incident":
        """Retorna uma cópia com exatamente uma nova entrada de auditoria."""

        entry = AuditEntry(action=action, user_id=user_id, timestamp=timestamp)
        return replace(self, audit_trail=(*self.audit_trail, entry))

    def to_mapping(self) -> dict[str, Any]:
        """Serializa a ocorrência em estrutura compatível com JSON."""

        return {
            "id": self.id,
            "title": self.title,
            "location_name": self.location_name,
            "location": self.coordinates.to_mapping() if self.coordinates else None,
            "description": self.description,
            "tags": list(self.tags),
            "owner_id": self.owner_id,
            "audit_trail": [
                {
                    "action": entry.action,
                    "user_id": entry.user_id,
                    "timestamp": entry.timestamp.isoformat() if entry.timestamp else None,
                }
                for entry in self.audit_trail
            ],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def normalize_tags(tags: Iterable[str] | None) -> Tuple[str, ...]:
    """Remove duplicados e valores vazios preservando a ordem informada."""

    if not tags:
        return ()
    seen: dict[str, None] = {}
    for tag in tags:
        text = str(tag).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)
