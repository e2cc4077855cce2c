"""Clientes HTTP para provedores externos."""
from .gemini_client import GeminiClient
from .nominatim_client import NominatimClient

__all__ = ["GeminiClient", "NominatimClient"]
