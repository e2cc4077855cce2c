"""Socorro - enriquecimento e cache de sinais para coordenação de desastres."""
from .container import SocorroContainer, build_container
from .domain import Coordinates, GeocodeResult, Incident, Report, VerificationResult

__version__ = "1.0.0"

__all__ = [
    "Coordinates",
    "GeocodeResult",
    "Incident",
    "Report",
    "SocorroContainer",
    "VerificationResult",
    "build_container",
]
