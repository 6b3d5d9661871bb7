"""clipscribe run — analyze a video and generate the approved clips."""

from __future__ import annotations

import asyncio

import click

from clipscribe.cli.common import build_backend, config_option, script_option
from clipscribe.errors import ClipScribeError
from clipscribe.models.state import Error
from clipscribe.pipeline.session import run_session
from clipscribe.pipeline.state_machine import AppStateMachine
from clipscribe.utils.progress import log_error


@click.command()
@click.option("--video", "-v", required=True, type=click.Path(), help="Video file")
@click.option(
    "--transcript", "-t",
    default=None,
    type=click.Path(),
    help="Transcript file (.vtt/.txt). Generated from the video when omitted.",
)
@click.option(
    "--context", "-c",
    default="",
    help="Guidance for clip selection, e.g. 'Focus on technical decisions'",
)
@config_option
@script_option
@click.option("--yes", "-y", is_flag=True, help="Keep every suggested clip without prompting")
@click.option("--open", "open_folder", is_flag=True, help="Open the output folder when done")
@click.option("--verbose", is_flag=True, help="Show workflow transitions")
def run_cmd(
    video: str,
    transcript: str | None,
    context: str,
    config_path: str | None,
    script: str | None,
    yes: bool,
    open_folder: bool,
    verbose: bool,
) -> None:
    """Find key moments in a video and cut them into clips."""
    try:
        config, events, gateway = build_backend(config_path, script, verbose=verbose)
    except ClipScribeError as e:
        log_error(str(e))
        raise SystemExit(1)

    machine = AppStateMachine(gateway, events)
    try:
        state = asyncio.run(
            run_session(
                machine,
                events,
                video_path=video,
                transcript_path=transcript,
                context=context,
                auto_approve=yes or config.review.auto_approve,
                open_folder=open_folder,
            )
        )
    except ClipScribeError as e:
        log_error(str(e))
        raise SystemExit(1)
    finally:
        machine.close()

    if isinstance(state, Error):
        log_error(f"Error: {state.message}")
        raise SystemExit(1)
