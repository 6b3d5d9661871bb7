"""Clip models exchanged with the backend."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Clip(BaseModel):
    """A candidate or final clip.

    Timestamps are ``HH:MM:SS`` strings; the backend guarantees that
    ``start_time`` precedes ``end_time``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    is_selected: bool = Field(default=False, alias="isSelected")
    sanitized_filename: str | None = Field(default=None, alias="sanitizedFilename")

    def with_selection(self, selected: bool) -> Clip:
        return self.model_copy(update={"is_selected": selected})

    def to_payload(self) -> dict:
        """Serialize with the backend's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class GenerationResult(BaseModel):
    """Result of a clip generation request."""

    model_config = ConfigDict(frozen=True)

    output_directory: str
    clip_count: int = Field(ge=0)


class ClipProgress(BaseModel):
    """Payload of a ``clip-progress`` event."""

    model_config = ConfigDict(frozen=True)

    current: int = Field(ge=0)
    total: int = Field(gt=0)

    @model_validator(mode="after")
    def _current_within_total(self) -> ClipProgress:
        if self.current > self.total:
            raise ValueError(f"current ({self.current}) exceeds total ({self.total})")
        return self

    @property
    def percent(self) -> float:
        return self.current * 100 / self.total
