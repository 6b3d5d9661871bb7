"""Replay backend — serves scripted responses from a YAML file.

Lets the CLI and the test suite run a full session without the real
processing backend. Progress is pushed on the same event streams the
real backend uses.
"""

from __future__ import annotations

import asyncio
import re
import uuid
from pathlib import Path, PurePath
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clipscribe.errors import BackendError, ConfigError
from clipscribe.gateway.base import CLIP_PROGRESS, TRANSCRIPTION_PROGRESS
from clipscribe.gateway.events import EventBus
from clipscribe.models.clip import Clip, ClipProgress, GenerationResult
from clipscribe.utils.io import read_yaml
from clipscribe.utils.progress import log_debug

_UNSAFE_FILENAME_CHARS = re.compile(r'[/\\:*?"<>|]')

DEFAULT_TRANSCRIPTION_STATUS = [
    "Extracting audio from video...",
    "Transcribing audio with Whisper AI...",
    "Transcript generated successfully!",
]


def sanitize_filename(title: str) -> str:
    """Replace characters that are unsafe in file names with underscores."""
    return _UNSAFE_FILENAME_CHARS.sub("_", title).strip()


class ScriptedClip(BaseModel):
    """A clip suggestion as written in a replay script."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: str | None = None
    title: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")


class ScriptedTranscript(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str | None = None  # defaults to <video stem>.vtt next to the video
    status: list[str] = Field(default_factory=lambda: list(DEFAULT_TRANSCRIPTION_STATUS))


class ReplayScript(BaseModel):
    """Scripted backend responses."""

    model_config = ConfigDict(extra="forbid")

    transcript: ScriptedTranscript = Field(default_factory=ScriptedTranscript)
    clips: list[ScriptedClip] = Field(default_factory=list)
    output_directory: str | None = None  # defaults to <video stem>_Clips
    api_key: str | None = None
    valid_keys: list[str] | None = None  # None accepts any non-empty key
    failures: dict[str, str] = Field(default_factory=dict)
    step_delay: float = Field(default=0.0, ge=0.0)


class ReplayGateway:
    """Backend gateway that replays a ``ReplayScript``."""

    name = "replay"

    def __init__(self, events: EventBus, script: ReplayScript | None = None):
        self.events = events
        self.script = script or ReplayScript()
        self.saved_key: str | None = self.script.api_key
        self.opened_paths: list[str] = []
        self.calls: list[str] = []

    @classmethod
    def from_file(cls, path: Path | str, events: EventBus) -> ReplayGateway:
        """Load a replay script from YAML."""
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Replay script not found: {path}")

        try:
            data = read_yaml(path)
        except Exception as e:
            raise ConfigError(f"Cannot read replay script {path}: {e}") from e

        try:
            script = ReplayScript(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid replay script {path}: {e}") from e
        return cls(events, script)

    def _begin(self, operation: str) -> None:
        self.calls.append(operation)
        log_debug("Replay", operation)
        message = self.script.failures.get(operation)
        if message is not None:
            raise BackendError(operation, message)

    async def _pause(self) -> None:
        await asyncio.sleep(self.script.step_delay)

    async def generate_transcript(self, video_path: str) -> str:
        self._begin("generate_transcript")
        for message in self.script.transcript.status:
            await self._pause()
            self.events.emit(TRANSCRIPTION_PROGRESS, message)

        if self.script.transcript.path:
            return self.script.transcript.path
        video = PurePath(video_path)
        return str(video.with_name(f"{video.stem}.vtt"))

    async def analyze_for_clips(
        self,
        transcript_path: str,
        video_path: str,
        user_context: str | None,
    ) -> list[Clip]:
        self._begin("analyze")
        await self._pause()
        return [
            Clip(
                id=scripted.id or str(uuid.uuid4()),
                title=scripted.title,
                start_time=scripted.start_time,
                end_time=scripted.end_time,
                sanitized_filename=sanitize_filename(scripted.title),
            )
            for scripted in self.script.clips
        ]

    async def generate_clips(
        self, video_path: str, clips: Sequence[Clip]
    ) -> GenerationResult:
        self._begin("generate")
        to_generate = [clip for clip in clips if clip.is_selected]
        if not to_generate:
            raise BackendError("generate", "No clips selected")

        total = len(to_generate)
        for index, _clip in enumerate(to_generate):
            await self._pause()
            progress = ClipProgress(current=index + 1, total=total)
            self.events.emit(CLIP_PROGRESS, progress.model_dump())

        output = self.script.output_directory
        if output is None:
            video = PurePath(video_path)
            output = str(video.with_name(f"{video.stem}_Clips"))
        return GenerationResult(output_directory=output, clip_count=total)

    async def validate_api_key(self, api_key: str) -> bool:
        self._begin("validate_api_key")
        if self.script.valid_keys is None:
            return bool(api_key)
        return api_key in self.script.valid_keys

    async def save_api_key(self, api_key: str) -> None:
        self._begin("save_api_key")
        self.saved_key = api_key

    async def get_api_key(self) -> str | None:
        self._begin("get_api_key")
        return self.saved_key

    async def open_in_file_explorer(self, path: str) -> None:
        self._begin("open_in_file_explorer")
        self.opened_paths.append(path)
