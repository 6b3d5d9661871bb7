"""Review gate — CLI prompts for curating suggested clips."""

from __future__ import annotations

import re

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clipscribe.models.clip_set import ClipSet
from clipscribe.models.state import Review
from clipscribe.pipeline.state_machine import AppStateMachine
from clipscribe.utils.progress import log_warning

console = Console()


def _plural(count: int) -> str:
    return f"{count} clip{'s' if count != 1 else ''}"


def show_clips(clips: ClipSet) -> None:
    """Print the clip table with selection marks."""
    table = Table(title=f"Review Clips ({clips.selected_count()} selected)", show_lines=True)
    table.add_column("#", style="bold", justify="right")
    table.add_column("")
    table.add_column("Title")
    table.add_column("Time")
    table.add_column("File", style="dim")

    for index, clip in enumerate(clips, start=1):
        mark = "[green]●[/green]" if clip.is_selected else "[dim]○[/dim]"
        filename = f"{clip.sanitized_filename}.mp4" if clip.sanitized_filename else "—"
        table.add_row(
            str(index),
            mark,
            escape(clip.title),
            f"{clip.start_time} → {clip.end_time}",
            escape(filename),
        )
    console.print(table)


def parse_indexes(text: str, count: int) -> list[int]:
    """Parse ``"1, 3 4"`` into 1-based clip numbers within ``count``."""
    indexes = []
    for token in re.split(r"[,\s]+", text.strip()):
        if not token:
            continue
        if not token.isdigit():
            raise ValueError(f"Not a clip number: {token!r}")
        index = int(token)
        if not 1 <= index <= count:
            raise ValueError(f"Clip number out of range: {index} (1-{count})")
        indexes.append(index)
    return indexes


def present_review(machine: AppStateMachine, *, auto_approve: bool = False) -> bool:
    """Let the user curate the suggested clips. Returns True to generate."""
    if not isinstance(machine.state, Review):
        return False

    console.print()
    console.print("[bold yellow]═══ Review Clips ═══[/bold yellow]")
    console.print()

    while True:
        clips = machine.state.clips
        show_clips(clips)
        if auto_approve:
            break

        answer = click.prompt(
            "Toggle clips (e.g. 1,3; blank to continue)",
            default="",
            show_default=False,
        )
        if not answer.strip():
            break
        try:
            indexes = parse_indexes(answer, len(clips))
        except ValueError as e:
            log_warning(str(e))
            continue
        for index in indexes:
            machine.toggle_clip(clips[index - 1].id)

    selected = machine.state.clips.selected_count()
    if selected == 0:
        log_warning("No clips selected")
        return False
    if auto_approve:
        return True
    return click.confirm(f"Generate {_plural(selected)}?", default=True)
