"""Difusão de eventos em tempo real."""
from .broadcaster import Broadcaster, Subscription
from .events import INCIDENT_CHANGED, SOCIAL_SIGNAL_REFRESHED, RealtimeEvent

__all__ = [
    "Broadcaster",
    "INCIDENT_CHANGED",
    "RealtimeEvent",
    "SOCIAL_SIGNAL_REFRESHED",
    "Subscription",
]
