"""clipscribe init — write a starter config and replay script."""

from __future__ import annotations

from pathlib import Path

import click

from clipscribe.gateway.replay import ReplayScript, ScriptedClip
from clipscribe.models.config import DEFAULT_CONFIG_FILE, AppConfig, BackendConfig
from clipscribe.utils.io import write_yaml
from clipscribe.utils.progress import log_error, log_success

SAMPLE_SCRIPT = "replay.yaml"


def _sample_script() -> ReplayScript:
    return ReplayScript(
        clips=[
            ScriptedClip(title="Intro", start_time="00:00:00", end_time="00:00:30"),
            ScriptedClip(title="Key Moment", start_time="00:01:00", end_time="00:01:45"),
        ],
    )


@click.command()
@click.option(
    "--output", "-o",
    default=".",
    type=click.Path(),
    help="Directory to write the files into",
)
@click.option("--force", is_flag=True, help="Overwrite existing files")
def init_cmd(output: str, force: bool) -> None:
    """Scaffold clipscribe.yaml and a sample replay script."""
    target = Path(output).resolve()
    config_path = target / DEFAULT_CONFIG_FILE
    script_path = target / SAMPLE_SCRIPT

    existing = [p for p in (config_path, script_path) if p.exists()]
    if existing and not force:
        for path in existing:
            log_error(f"Already exists: {path}")
        raise SystemExit(1)

    config = AppConfig(backend=BackendConfig(script=SAMPLE_SCRIPT))
    write_yaml(config_path, config.model_dump(mode="json"))
    write_yaml(
        script_path,
        _sample_script().model_dump(mode="json", by_alias=True, exclude_none=True),
    )

    log_success(f"Config: {config_path}")
    log_success(f"Replay script: {script_path}")
    click.echo(f"\nNext: cd {target} && clipscribe run --video talk.mp4 --transcript talk.vtt")
