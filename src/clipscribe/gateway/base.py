"""Protocol for the processing backend."""

from __future__ import annotations

from typing import Protocol, Sequence

from clipscribe.models.clip import Clip, GenerationResult

TRANSCRIPTION_PROGRESS = "transcription-progress"
CLIP_PROGRESS = "clip-progress"


class BackendGateway(Protocol):
    """Asynchronous boundary to the backend that does the heavy lifting.

    Every request may fail by raising ``BackendError``. Interim progress is
    pushed on the ``transcription-progress`` and ``clip-progress`` event
    streams rather than returned.
    """

    name: str

    async def generate_transcript(self, video_path: str) -> str: ...

    async def analyze_for_clips(
        self,
        transcript_path: str,
        video_path: str,
        user_context: str | None,
    ) -> list[Clip]: ...

    async def generate_clips(
        self, video_path: str, clips: Sequence[Clip]
    ) -> GenerationResult: ...

    async def validate_api_key(self, api_key: str) -> bool: ...

    async def save_api_key(self, api_key: str) -> None: ...

    async def get_api_key(self) -> str | None: ...

    async def open_in_file_explorer(self, path: str) -> None: ...
