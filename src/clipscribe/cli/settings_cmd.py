"""clipscribe settings — manage the backend API key."""

from __future__ import annotations

import asyncio

import click

from clipscribe.cli.common import build_backend, config_option, script_option
from clipscribe.errors import ClipScribeError
from clipscribe.pipeline.credentials import ApiKeySettings
from clipscribe.utils.progress import log, log_error


@click.group()
@config_option
@script_option
@click.pass_context
def settings_cmd(ctx: click.Context, config_path: str | None, script: str | None) -> None:
    """Manage the OpenAI API key used by the backend."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["script"] = script


def _settings(ctx: click.Context) -> ApiKeySettings:
    _, _, gateway = build_backend(ctx.obj["config_path"], ctx.obj["script"])
    return ApiKeySettings(gateway)


@settings_cmd.command("show")
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show the stored API key (last 4 characters only)."""
    try:
        hint = asyncio.run(_settings(ctx).masked_hint())
    except ClipScribeError as e:
        log_error(str(e))
        raise SystemExit(1)
    if hint:
        click.echo(f"API key: {hint}")
    else:
        log("[dim]No API key configured.[/dim]", style="")


@settings_cmd.command("set-key")
@click.argument("api_key")
@click.pass_context
def set_key(ctx: click.Context, api_key: str) -> None:
    """Validate and store API_KEY."""
    try:
        asyncio.run(_settings(ctx).save(api_key))
    except ClipScribeError as e:
        log_error(str(e))
        raise SystemExit(1)
