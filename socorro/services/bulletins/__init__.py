"""Boletins oficiais."""
from .aggregator import CACHE_KEY, BulletinAggregator

__all__ = ["BulletinAggregator", "CACHE_KEY"]
