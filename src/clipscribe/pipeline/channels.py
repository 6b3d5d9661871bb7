"""Subscriptions to backend progress streams."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import ValidationError

from clipscribe.gateway.base import CLIP_PROGRESS, TRANSCRIPTION_PROGRESS
from clipscribe.gateway.events import EventBus
from clipscribe.models.clip import ClipProgress
from clipscribe.utils.progress import log_warning


class ProgressChannel:
    """Maps ``clip-progress`` ticks to a percentage.

    The latest tick wins: no smoothing and no monotonicity check, so a
    backend that reports a lower value than before is passed through.
    Stays registered for the lifetime of the application; the receiver
    decides whether a tick applies to its current stage.
    """

    event = CLIP_PROGRESS

    def __init__(self, events: EventBus, on_progress: Callable[[float], None]):
        self._on_progress = on_progress
        self._unsubscribe = events.subscribe(self.event, self._handle)

    @staticmethod
    def to_percent(payload: Any) -> float:
        """Normalize a ``{current, total}`` payload to ``current / total * 100``."""
        if isinstance(payload, ClipProgress):
            return payload.percent
        return ClipProgress.model_validate(payload).percent

    def _handle(self, payload: Any) -> None:
        try:
            percent = self.to_percent(payload)
        except ValidationError as e:
            log_warning(f"Ignoring malformed {self.event} payload {payload!r}: {e.error_count()} error(s)")
            return
        self._on_progress(percent)

    def close(self) -> None:
        self._unsubscribe()


class TranscriptionStatus:
    """Forwards free-text ``transcription-progress`` messages."""

    event = TRANSCRIPTION_PROGRESS

    def __init__(self, events: EventBus, on_status: Callable[[str], None]):
        self._on_status = on_status
        self._unsubscribe = events.subscribe(self.event, self._handle)

    def _handle(self, payload: Any) -> None:
        self._on_status(str(payload))

    def close(self) -> None:
        self._unsubscribe()
