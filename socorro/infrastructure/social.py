"""Fonte simulada de publicações de redes sociais."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Sequence

from socorro.domain.entities import SocialPost
from socorro.domain.ports import SocialFeed

_MOCK_POSTS = (
    ("#floodrelief Need food in NYC Lower East Side", "citizen1"),
    ("SOS: Family trapped in Manhattan basement #emergency", "citizen2"),
    ("Red Cross shelter at 42nd Street has space #disaster", "reliefworker1"),
    ("URGENT: Medical supplies needed in Brooklyn #help", "medic1"),
)


class StaticSocialFeed(SocialFeed):
    """Devolve publicações fixas com o horário da consulta."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def fetch(self, disaster_id: str) -> Sequence[SocialPost]:
        timestamp = self._clock()
        return [SocialPost(post=post, user=user, timestamp=timestamp) for post, user in _MOCK_POSTS]


__all__ = ["StaticSocialFeed"]
