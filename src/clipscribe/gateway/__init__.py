"""Backend boundary: gateway protocol, event bus and built-in backends."""

from clipscribe.gateway.base import CLIP_PROGRESS, TRANSCRIPTION_PROGRESS, BackendGateway
from clipscribe.gateway.events import EventBus

__all__ = [
    "BackendGateway",
    "CLIP_PROGRESS",
    "EventBus",
    "TRANSCRIPTION_PROGRESS",
]
