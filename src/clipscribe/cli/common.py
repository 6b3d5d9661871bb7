"""Shared option handling for CLI commands."""

from __future__ import annotations

import click

from clipscribe.gateway.base import BackendGateway
from clipscribe.gateway.events import EventBus
from clipscribe.gateway.loader import load_gateway
from clipscribe.models.config import AppConfig, load_config
from clipscribe.utils.progress import set_verbose

config_option = click.option(
    "--config", "config_path",
    default=None,
    type=click.Path(),
    help="Path to clipscribe.yaml",
)
script_option = click.option(
    "--script",
    default=None,
    type=click.Path(),
    help="Replay script for the built-in backend (overrides config)",
)


def build_backend(
    config_path: str | None,
    script: str | None,
    *,
    verbose: bool = False,
) -> tuple[AppConfig, EventBus, BackendGateway]:
    """Load config and construct the event bus and gateway."""
    config = load_config(config_path)
    if script:
        config.backend.script = script
        config.backend.factory = None
    set_verbose(verbose or config.logging.verbose)

    events = EventBus()
    gateway = load_gateway(config, events)
    return config, events, gateway
