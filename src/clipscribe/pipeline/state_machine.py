"""Application state machine — sequences analysis, review and generation.

All transitions happen on the event loop that awaits the backend calls,
so they never interleave. Each request kind carries a generation counter;
a result is applied only if its ticket is still the latest for that kind,
which is how completions that arrive after ``reset()`` are dropped.

Limitations:
- Nothing is ever cancelled on the backend. ``reset()`` only stops the
  client from acting on a result that is still in flight.
- Progress ticks are applied verbatim, including values lower than the
  previous tick.
"""

from __future__ import annotations

from typing import Callable, Iterable

from clipscribe.errors import BackendError
from clipscribe.gateway.base import BackendGateway
from clipscribe.gateway.events import EventBus
from clipscribe.models.clip import Clip
from clipscribe.models.clip_set import ClipSet
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
from clipscribe.pipeline.channels import ProgressChannel, TranscriptionStatus
from clipscribe.utils.progress import log_debug, log_error, log_success, log_warning

REQUEST_KINDS = ("transcript", "analyze", "generate")

TRANSCRIPTION_STARTED = "Starting transcription..."
TRANSCRIPTION_DONE = "Transcript generated!"

StateListener = Callable[[WorkflowState], None]


def _render_error(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class AppStateMachine:
    """Owns the workflow state and the session inputs."""

    def __init__(self, gateway: BackendGateway, events: EventBus):
        self.gateway = gateway
        self._state: WorkflowState = Ready()
        self._inputs = SessionInputs()
        self._tickets: dict[str, int] = {kind: 0 for kind in REQUEST_KINDS}
        self._transcribing = False
        self._listeners: list[StateListener] = []
        self.transcription_status: str | None = None

        # One subscription each for the lifetime of the machine; they
        # survive reset() and are gated on the current stage instead.
        self._progress = ProgressChannel(events, self._apply_progress)
        self._transcription = TranscriptionStatus(events, self._apply_transcription_status)

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def inputs(self) -> SessionInputs:
        return self._inputs.model_copy()

    @property
    def is_transcribing(self) -> bool:
        return self._transcribing

    @property
    def can_analyze(self) -> bool:
        return isinstance(self._state, Ready) and self._inputs.can_analyze

    @property
    def can_generate_transcript(self) -> bool:
        return (
            bool(self._inputs.video_path)
            and not self._inputs.transcript_path
            and not self._transcribing
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every transition.

        A listener that raises is logged and does not stop the transition.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_video_path(self, path: str | None) -> None:
        self._inputs.video_path = path

    def set_transcript_path(self, path: str | None) -> None:
        self._inputs.transcript_path = path

    def set_context(self, text: str) -> None:
        self._inputs.context = text

    def _transition(self, new_state: WorkflowState) -> None:
        old = self._state
        self._state = new_state
        log_debug("Workflow", f"{old.status} → {new_state.status}")
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as e:
                log_error(f"State listener failed on {new_state.status}: {e}")

    def _issue(self, kind: str) -> int:
        self._tickets[kind] += 1
        return self._tickets[kind]

    def _is_current(self, kind: str, ticket: int) -> bool:
        if self._tickets[kind] != ticket:
            log_debug("Workflow", f"Dropping stale {kind} result (request {ticket})")
            return False
        return True

    def _apply_progress(self, percent: float) -> None:
        if not isinstance(self._state, Processing):
            log_debug("Workflow", f"Discarding progress tick outside processing ({self._state.status})")
            return
        self._transition(Processing(progress=percent))

    def _apply_transcription_status(self, message: str) -> None:
        if self._transcribing:
            self.transcription_status = message

    async def request_transcript_generation(self) -> str | None:
        """Ask the backend for a transcript of the selected video.

        Runs beside the main workflow and never changes its state. Returns
        the new transcript path, or ``None`` when preconditions are not met
        or the session was reset while the request was in flight. A path set
        by hand in the meantime is kept. A backend failure is raised to the
        caller as ``BackendError``.
        """
        if not self.can_generate_transcript:
            log_debug("Transcript", "Preconditions not met; ignoring request")
            return None

        video_path = self._inputs.video_path
        ticket = self._issue("transcript")
        self._transcribing = True
        self.transcription_status = TRANSCRIPTION_STARTED
        log_debug("Transcript", f"Requesting transcript for {video_path}")

        try:
            transcript_path = await self.gateway.generate_transcript(video_path)
        except Exception as e:
            if not self._is_current("transcript", ticket):
                return None
            self._transcribing = False
            self.transcription_status = None
            log_warning(f"Failed to generate transcript: {_render_error(e)}")
            if isinstance(e, BackendError):
                raise
            raise BackendError("generate_transcript", _render_error(e)) from e

        if not self._is_current("transcript", ticket):
            return None

        self._transcribing = False
        self.transcription_status = TRANSCRIPTION_DONE
        if self._inputs.transcript_path:
            # Chosen by hand while the request was in flight
            log_warning(
                f"Keeping {self._inputs.transcript_path}; generated transcript left at {transcript_path}"
            )
            return transcript_path
        self._inputs.transcript_path = transcript_path
        log_success(f"Transcript ready: {transcript_path}")
        return transcript_path

    async def analyze(self) -> None:
        """Run clip analysis on the current inputs.

        A no-op unless the workflow is ``Ready`` and both paths are set.
        """
        if not self.can_analyze:
            log_debug("Analyze", f"Preconditions not met in {self._state.status}; ignoring")
            return

        inputs = self._inputs.model_copy()
        ticket = self._issue("analyze")
        self._transition(Analyzing())
        log_debug("Analyze", f"Requesting analysis of {inputs.transcript_path}")

        try:
            clips = await self.gateway.analyze_for_clips(
                inputs.transcript_path,
                inputs.video_path,
                inputs.user_context,
            )
        except Exception as e:
            if self._is_current("analyze", ticket):
                log_error(f"Analysis failed: {_render_error(e)}")
                self._transition(Error(message=_render_error(e)))
            return

        if not self._is_current("analyze", ticket):
            return

        clip_set = ClipSet.from_analysis(clips)
        log_success(f"Analysis found {len(clip_set)} clip(s)")
        self._transition(Review(clips=clip_set))

    def toggle_clip(self, clip_id: str) -> bool:
        """Flip selection of one clip while reviewing.

        Returns True when a clip was toggled; an unknown id or a call outside
        ``Review`` changes nothing.
        """
        state = self._state
        if not isinstance(state, Review):
            log_debug("Review", f"Cannot toggle clips in {state.status}")
            return False

        clips = state.clips.toggle(clip_id)
        if clips is state.clips:
            log_debug("Review", f"Unknown clip id {clip_id}")
            return False

        self._transition(Review(clips=clips))
        return True

    async def generate(self, selected: Iterable[Clip] | None = None) -> None:
        """Render the given clips (the current selection by default).

        A no-op outside ``Review``, without a video path, or with nothing
        to render.
        """
        state = self._state
        video_path = self._inputs.video_path
        if not isinstance(state, Review) or not video_path:
            log_debug("Generate", f"Preconditions not met in {state.status}; ignoring")
            return

        clips = tuple(selected) if selected is not None else state.clips.selected()
        if not clips:
            log_debug("Generate", "No clips selected; ignoring")
            return

        ticket = self._issue("generate")
        self._transition(Processing(progress=0.0))
        log_debug("Generate", f"Requesting {len(clips)} clip(s) from {video_path}")

        try:
            result = await self.gateway.generate_clips(video_path, clips)
        except Exception as e:
            if self._is_current("generate", ticket):
                log_error(f"Clip generation failed: {_render_error(e)}")
                self._transition(Error(message=_render_error(e)))
            return

        if not self._is_current("generate", ticket):
            return

        log_success(f"Generated {result.clip_count} clip(s) in {result.output_directory}")
        self._transition(
            Complete(output_path=result.output_directory, clip_count=result.clip_count)
        )

    async def open_output_folder(self) -> bool:
        """Reveal the output directory; failures are logged only."""
        state = self._state
        if not isinstance(state, Complete):
            return False
        try:
            await self.gateway.open_in_file_explorer(state.output_path)
        except Exception as e:
            log_error(f"Failed to open folder: {_render_error(e)}")
            return False
        return True

    def reset(self) -> None:
        """Return to ``Ready`` and forget the session.

        In-flight requests keep running on the backend; their results are
        ignored when they arrive.
        """
        for kind in REQUEST_KINDS:
            self._issue(kind)
        self._transcribing = False
        self.transcription_status = None
        self._inputs = SessionInputs()
        self._transition(Ready())

    def close(self) -> None:
        """Drop the progress subscriptions."""
        self._progress.close()
        self._transcription.close()
