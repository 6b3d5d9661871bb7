"""In-process event bus for backend push notifications."""

from __future__ import annotations

from typing import Any, Callable

from clipscribe.utils.progress import log_error

Handler = Callable[[Any], None]


class EventBus:
    """Named event streams with synchronous fan-out.

    Handlers run in subscription order on the emitting thread, so every
    delivery is serialized with the rest of the event loop's work.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        """Register a handler; returns a callable that removes it."""
        self._handlers.setdefault(event, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event, [])
            if handler in handlers:
                handlers.remove(handler)
            if not handlers:
                self._handlers.pop(event, None)

        return unsubscribe

    def emit(self, event: str, payload: Any) -> None:
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(payload)
            except Exception as e:
                log_error(f"Handler for '{event}' failed: {e}")

    def subscriber_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))
