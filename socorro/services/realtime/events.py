"""Eventos de mudança de estado difundidos aos observadores."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

INCIDENT_CHANGED = "incident_changed"
SOCIAL_SIGNAL_REFRESHED = "social_signal_refreshed"


@dataclass(frozen=True)
class RealtimeEvent:
    #: Nome do tópico (todos os observadores recebem todos os tópicos).
    event: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        return {"event": self.event, "data": dict(self.data)}
