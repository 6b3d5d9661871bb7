"""Workflow state — one tagged value per stage of a session."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from clipscribe.models.clip_set import ClipSet


class _Stage(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Ready(_Stage):
    """Awaiting inputs or a user action."""

    status: Literal["ready"] = "ready"


class Analyzing(_Stage):
    """Analysis request in flight."""

    status: Literal["analyzing"] = "analyzing"


class Review(_Stage):
    """Analysis succeeded; the user is curating the selection."""

    status: Literal["review"] = "review"
    clips: ClipSet


class Processing(_Stage):
    """Generation request in flight."""

    status: Literal["processing"] = "processing"
    progress: float = Field(default=0.0, ge=0.0, le=100.0)


class Complete(_Stage):
    """Generation succeeded."""

    status: Literal["complete"] = "complete"
    output_path: str
    clip_count: int = Field(ge=0)


class Error(_Stage):
    """A workflow operation failed."""

    status: Literal["error"] = "error"
    message: str


WorkflowState = Annotated[
    Union[Ready, Analyzing, Review, Processing, Complete, Error],
    Field(discriminator="status"),
]
