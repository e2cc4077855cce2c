"""Encadeamento extração de local -> geocodificação."""
from __future__ import annotations

from socorro.domain.entities import GeocodeResult
from socorro.domain.errors import LocationNotFound

from .geocoder import Geocoder
from .location_extractor import LocationExtractor

EXTRACTION_FAILED = "Could not extract location"
GEOCODING_FAILED = "Could not geocode location"


class GeocodeOrchestrator:
    """Compõe o extrator e o geocodificador mantendo seus caches independentes.

    Textos diferentes costumam resolver para o mesmo nome de lugar; por isso
    o cache de coordenadas é indexado pelo nome e não pelo texto original.
    """

    def __init__(self, extractor: LocationExtractor, geocoder: Geocoder) -> None:
        self._extractor = extractor
        self._geocoder = geocoder

    def resolve(self, text: str) -> GeocodeResult:
        location_name = self._extractor.extract(text)
        if not location_name:
            raise LocationNotFound(EXTRACTION_FAILED, stage="extract")

        coordinates = self._geocoder.geocode(location_name)
        if coordinates is None:
            raise LocationNotFound(GEOCODING_FAILED, stage="geocode")

        return GeocodeResult(location_name=location_name, coordinates=coordinates)


__all__ = ["EXTRACTION_FAILED", "GEOCODING_FAILED", "GeocodeOrchestrator"]
