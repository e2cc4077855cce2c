"""Verificação de imagens de relatos."""
from .image_verifier import DEGRADED_RESULT, ImageVerifier

__all__ = ["DEGRADED_RESULT", "ImageVerifier"]
