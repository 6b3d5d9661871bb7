"""Resolve the configured backend gateway."""

from __future__ import annotations

import importlib

from clipscribe.errors import ConfigError
from clipscribe.gateway.base import BackendGateway
from clipscribe.gateway.events import EventBus
from clipscribe.gateway.replay import ReplayGateway
from clipscribe.models.config import AppConfig
from clipscribe.utils.progress import log_debug


def _import_factory(dotted: str):
    """Import ``package.module:attr.path`` and return the target."""
    module_name, sep, attr_path = dotted.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(f"Backend factory must look like 'module:callable', got {dotted!r}")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import backend module {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigError(f"Backend factory {dotted!r} not found") from e
    return target


def load_gateway(config: AppConfig, events: EventBus) -> BackendGateway:
    """Build the backend gateway described by ``config.backend``."""
    backend = config.backend

    if backend.factory:
        factory = _import_factory(backend.factory)
        gateway = factory(events, config)
        log_debug("Backend", f"Loaded {backend.factory}")
        return gateway

    if backend.script:
        log_debug("Backend", f"Replaying {backend.script}")
        return ReplayGateway.from_file(backend.script, events)

    return ReplayGateway(events)
