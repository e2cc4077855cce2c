"""Enriquecimento geográfico de textos livres."""
from .geocoder import Geocoder
from .location_extractor import LocationExtractor
from .orchestrator import GeocodeOrchestrator

__all__ = ["GeocodeOrchestrator", "Geocoder", "LocationExtractor"]
