"""Exception types raised across ClipScribe."""

from __future__ import annotations


class ClipScribeError(Exception):
    """Base class for ClipScribe errors."""


class BackendError(ClipScribeError):
    """Raised when a backend request resolves with a failure."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(message)


class InvalidApiKeyError(ClipScribeError):
    """Raised when an API key is rejected before or by the backend."""


class ConfigError(ClipScribeError):
    """Raised when configuration cannot be loaded or applied."""
