"""Portas que conectam o domínio com provedores e adaptadores."""
from .cache_store import DEFAULT_TTL, CacheStore
from .event_publisher import EventPublisher
from .providers import (
    BulletinSource,
    GeocodingProvider,
    SocialFeed,
    TextGenerationProvider,
)

__all__ = [
    "DEFAULT_TTL",
    "BulletinSource",
    "CacheStore",
    "EventPublisher",
    "GeocodingProvider",
    "SocialFeed",
    "TextGenerationProvider",
]
