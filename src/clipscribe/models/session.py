"""Session inputs collected before analysis."""

from __future__ import annotations

from pydantic import BaseModel


class SessionInputs(BaseModel):
    """Paths and free-text guidance for one session."""

    video_path: str | None = None
    transcript_path: str | None = None
    context: str = ""

    @property
    def user_context(self) -> str | None:
        """Context as sent to the backend; empty means absent."""
        return self.context or None

    @property
    def can_analyze(self) -> bool:
        return bool(self.video_path) and bool(self.transcript_path)
