"""Interactive session runner used by ``clipscribe run``."""

from __future__ import annotations

from clipscribe.gateway.base import TRANSCRIPTION_PROGRESS
from clipscribe.gateway.events import EventBus
from clipscribe.models.state import Complete, Error, Processing, WorkflowState
from clipscribe.pipeline.gate import present_review
from clipscribe.pipeline.state_machine import AppStateMachine
from clipscribe.utils.progress import log_step, log_success, log_warning, show_summary


def _render_progress(state: WorkflowState) -> None:
    if isinstance(state, Processing):
        log_step("Generate", f"{state.progress:.0f}%")


async def run_session(
    machine: AppStateMachine,
    events: EventBus,
    *,
    video_path: str,
    transcript_path: str | None = None,
    context: str = "",
    auto_approve: bool = False,
    open_folder: bool = False,
) -> WorkflowState:
    """Drive one session from inputs to a terminal state.

    Steps:
    1. Generate a transcript when none is given
    2. Analyze transcript and video for clip suggestions
    3. Review gate (toggle clips, confirm)
    4. Generate the selected clips
    """
    machine.set_video_path(video_path)
    machine.set_transcript_path(transcript_path)
    machine.set_context(context)

    stop_status = events.subscribe(
        TRANSCRIPTION_PROGRESS, lambda message: log_step("Transcript", str(message))
    )
    stop_progress = machine.subscribe(_render_progress)
    try:
        if not transcript_path:
            log_step("Transcript", "No transcript given; generating one")
            await machine.request_transcript_generation()

        log_step("Analyze", "Analyzing transcript with AI...")
        await machine.analyze()
        if isinstance(machine.state, Error):
            return machine.state

        if not present_review(machine, auto_approve=auto_approve):
            log_warning("Nothing generated. Session reset.")
            machine.reset()
            return machine.state

        log_step("Generate", "Generating video clips...")
        await machine.generate()

        state = machine.state
        if isinstance(state, Complete):
            show_summary(
                "Clips Complete",
                {
                    "Clips": state.clip_count,
                    "Output": state.output_path,
                },
            )
            if open_folder:
                if await machine.open_output_folder():
                    log_success(f"Opened {state.output_path}")
        return state
    finally:
        stop_progress()
        stop_status()
