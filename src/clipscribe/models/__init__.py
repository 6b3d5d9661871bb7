"""Pydantic data models for ClipScribe."""

from clipscribe.models.clip import Clip, ClipProgress, GenerationResult
from clipscribe.models.clip_set import ClipSet
from clipscribe.models.config import AppConfig
from clipscribe.models.session import SessionInputs
from clipscribe.models.state import (
    Analyzing,
    Complete,
    Error,
    Processing,
    Ready,
    Review,
    WorkflowState,
)

__all__ = [
    "Clip",
    "ClipProgress",
    "GenerationResult",
    "ClipSet",
    "AppConfig",
    "SessionInputs",
    "Analyzing",
    "Complete",
    "Error",
    "Processing",
    "Ready",
    "Review",
    "WorkflowState",
]
