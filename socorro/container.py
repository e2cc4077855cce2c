"""Dependency container wiring the enrichment services."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from socorro.domain.ports import BulletinSource, CacheStore
from socorro.infrastructure.bulletins import (
    BulletinPage,
    ScrapedBulletinSource,
    StaticBulletinSource,
)
from socorro.infrastructure.cache import MemoryCacheStore, MongoCacheStore
from socorro.infrastructure.clients import GeminiClient, NominatimClient
from socorro.infrastructure.database import MongoClientFactory
from socorro.infrastructure.repositories import (
    INCIDENT_INDEXES,
    REPORT_INDEXES,
    RESOURCE_INDEXES,
    MongoIncidentRepository,
    MongoReportRepository,
    MongoResourceRepository,
    ensure_indexes,
)
from socorro.infrastructure.social import StaticSocialFeed
from socorro.services.bulletins import BulletinAggregator
from socorro.services.enrichment import GeocodeOrchestrator, Geocoder, LocationExtractor
from socorro.services.incidents import IncidentService, ReportService, SocialSignalService
from socorro.services.realtime import Broadcaster
from socorro.services.resources import ResourceLocator
from socorro.services.verification import ImageVerifier
from socorro.settings import SocorroSettings


@dataclass
class SocorroContainer:
    """Container exposing every service used by the HTTP layer and the CLI."""

    settings: SocorroSettings
    cache: CacheStore
    broadcaster: Broadcaster
    geocoder: Geocoder
    location_extractor: LocationExtractor
    geocode_orchestrator: GeocodeOrchestrator
    resource_locator: ResourceLocator
    image_verifier: ImageVerifier
    bulletin_aggregator: BulletinAggregator
    incident_service: IncidentService
    report_service: ReportService
    social_signal_service: SocialSignalService
    closers: list[Callable[[], Any]] = field(default_factory=list)

    def close(self) -> None:
        """Release HTTP clients and database connections owned by the container."""

        for closer in self.closers:
            closer()


def build_bulletin_source(settings: SocorroSettings) -> BulletinSource:
    """Use scraped official pages when configured, static bulletins otherwise."""

    if settings.bulletin_pages:
        pages = [BulletinPage.from_mapping(item) for item in settings.bulletin_pages]
        return ScrapedBulletinSource(pages, timeout=settings.http_timeout)
    return StaticBulletinSource()


def ensure_database_indexes(database: Any, *, include_cache: bool = True) -> list[str]:
    """Create the indexes of every collection and return the collection names."""

    collections = [
        ("disasters", INCIDENT_INDEXES),
        ("reports", REPORT_INDEXES),
        ("resources", RESOURCE_INDEXES),
    ]
    for name, definitions in collections:
        ensure_indexes(database[name], definitions)
    names = [name for name, _ in collections]
    if include_cache:
        MongoCacheStore(database["cache"]).ensure_indexes()
        names.append("cache")
    return names


def build_container(
    settings: SocorroSettings | None = None,
    factory: MongoClientFactory | None = None,
) -> SocorroContainer:
    """Build the service container from environment settings."""

    settings = settings or SocorroSettings.from_env()
    factory = factory or MongoClientFactory()
    database = factory.get_database()
    ensure_database_indexes(database, include_cache=settings.cache_backend == "mongo")

    if settings.cache_backend == "mongo":
        cache: CacheStore = MongoCacheStore(database["cache"], default_ttl=settings.cache_ttl)
    elif settings.cache_backend == "memory":
        cache = MemoryCacheStore(default_ttl=settings.cache_ttl)
    else:
        raise ValueError(
            "Unsupported cache backend: {backend}".format(backend=settings.cache_backend)
        )

    incident_repository = MongoIncidentRepository(database["disasters"])
    report_repository = MongoReportRepository(database["reports"])
    resource_repository = MongoResourceRepository(database["resources"])

    nominatim = NominatimClient(
        settings.nominatim_url,
        user_agent=settings.nominatim_user_agent,
        timeout=settings.http_timeout,
    )
    gemini = GeminiClient(
        settings.gemini_api_url,
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.http_timeout,
    )

    broadcaster = Broadcaster()
    geocoder = Geocoder(cache, nominatim)
    location_extractor = LocationExtractor(cache, gemini)

    return SocorroContainer(
        settings=settings,
        cache=cache,
        broadcaster=broadcaster,
        geocoder=geocoder,
        location_extractor=location_extractor,
        geocode_orchestrator=GeocodeOrchestrator(location_extractor, geocoder),
        resource_locator=ResourceLocator(resource_repository),
        image_verifier=ImageVerifier(
            cache,
            gemini,
            report_repository,
            cache_degraded_results=settings.cache_degraded_verifications,
        ),
        bulletin_aggregator=BulletinAggregator(cache, build_bulletin_source(settings)),
        incident_service=IncidentService(
            incident_repository, broadcaster, geocoder=geocoder
        ),
        report_service=ReportService(report_repository),
        social_signal_service=SocialSignalService(StaticSocialFeed(), broadcaster),
        closers=[nominatim.close, gemini.close, factory.close],
    )


__all__ = [
    "SocorroContainer",
    "build_bulletin_source",
    "build_container",
    "ensure_database_indexes",
]
