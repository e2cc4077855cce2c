"""Consulta de recursos de ajuda."""
from .locator import DEFAULT_RADIUS_METERS, ResourceLocator

__all__ = ["DEFAULT_RADIUS_METERS", "ResourceLocator"]
