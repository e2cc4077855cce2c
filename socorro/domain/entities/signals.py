"""Sinais de terceiros: boletins oficiais e publicações em redes sociais."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping


@dataclass(frozen=True)
class Bulletin:
    """Atualização publicada por um órgão oficial."""

    source: str
    title: str
    content: str
    url: str
    timestamp: datetime

    def to_mapping(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "title": self.title,
            "content": self.content,
            "url": self.url,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Bulletin":
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(
            source=str(data["source"]),
            title=str(data["title"]),
            content=str(data.get("content") or ""),
            url=str(data.get("url") or ""),
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class SocialPost:
    """Publicação de rede social relacionada a uma ocorrência."""

    post: str
    user: str
    timestamp: datetime

    def to_mapping(self) -> dict[str, Any]:
        return {
            "post": self.post,
            "user": self.user,
            "timestamp": self.timestamp.isoformat(),
        }
