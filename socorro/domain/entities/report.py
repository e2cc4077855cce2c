"""Relatos de campo e resultado da verificação de imagens."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    UNVERIFIED = "unverified"


@dataclass(frozen=True)
class Report:
    """Relato enviado por um usuário sobre uma ocorrência."""

    disaster_id: str
    user_id: str
    content: str
    id: Optional[str] = None
    image_url: Optional[str] = None
    verification_status: VerificationStatus = VerificationStatus.PENDING
    created_at: Optional[datetime] = None

    def to_mapping(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "disaster_id": self.disaster_id,
            "user_id": self.user_id,
            "content": self.content,
            "image_url": self.image_url,
            "verification_status": self.verification_status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class VerificationResult:
    """Avaliação de autenticidade de uma imagem."""

    #: Nota de 1 a 10, sendo 10 a mais autêntica.
    score: int
    #: Justificativa textual produzida pelo provedor.
    reasoning: str
    #: Situação propagada para os relatos que compartilham a imagem.
    status: VerificationStatus

    def to_mapping(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "reasoning": self.reasoning,
            "status": self.status.value,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VerificationResult":
        return cls(
            score=int(data["score"]),
            reasoning=str(data["reasoning"]),
            status=VerificationStatus(data["status"]),
        )
