"""Adaptadores de infraestrutura (MongoDB, HTTP, raspagem)."""
