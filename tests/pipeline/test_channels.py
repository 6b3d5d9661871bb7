import asyncio

from clipscribe.gateway.events import EventBus
from clipscribe.models.clip import ClipProgress
from clipscribe.models.state import Error, Processing, Ready, Review
from clipscribe.pipeline.channels import ProgressChannel, TranscriptionStatus


def test_progress_channel_normalizes_ticks():
    events = EventBus()
    received = []
    ProgressChannel(events, received.append)

    events.emit("clip-progress", {"current": 3, "total": 10})
    events.emit("clip-progress", ClipProgress(current=2, total=4))

    assert received == [30, 50]


def test_progress_channel_passes_regressions_through():
    events = EventBus()
    received = []
    ProgressChannel(events, received.append)

    for current in (2, 1, 1, 3):
        events.emit("clip-progress", {"current": current, "total": 4})

    assert received == [50, 25, 25, 75]


def test_progress_channel_drops_malformed_payloads():
    events = EventBus()
    received = []
    ProgressChannel(events, received.append)

    events.emit("clip-progress", {"current": 1, "total": 0})
    events.emit("clip-progress", {"current": 5, "total": 4})
    events.emit("clip-progress", "halfway")

    assert received == []


def test_progress_channel_close_unsubscribes():
    events = EventBus()
    channel = ProgressChannel(events, lambda _: None)
    assert events.subscriber_count("clip-progress") == 1
    channel.close()
    assert events.subscriber_count("clip-progress") == 0


def test_transcription_status_forwards_text():
    events = EventBus()
    messages = []
    TranscriptionStatus(events, messages.append)
    events.emit("transcription-progress", "Extracting audio from video...")
    assert messages == ["Extracting audio from video..."]


def test_tick_applies_only_while_processing(machine, events, sample_clips):
    events.emit("clip-progress", {"current": 3, "total": 10})
    assert isinstance(machine.state, Ready)

    machine._transition(Processing())
    events.emit("clip-progress", {"current": 3, "total": 10})
    assert machine.state == Processing(progress=30)


def test_tick_in_review_or_error_changes_nothing(machine, gateway, events, sample_clips, settle_tasks):
    machine.set_video_path("v.mp4")
    machine.set_transcript_path("t.vtt")

    async def scenario():
        task = asyncio.create_task(machine.analyze())
        await settle_tasks()
        gateway.resolve("analyze", sample_clips)
        await task

    asyncio.run(scenario())
    review = machine.state
    assert isinstance(review, Review)
    events.emit("clip-progress", {"current": 3, "total": 10})
    assert machine.state is review

    machine._transition(Error(message="timeout"))
    error = machine.state
    events.emit("clip-progress", {"current": 3, "total": 10})
    assert machine.state is error


def test_progress_subscription_survives_reset(machine, events):
    machine.reset()
    machine.reset()
    assert events.subscriber_count("clip-progress") == 1

    machine._transition(Processing())
    events.emit("clip-progress", {"current": 1, "total": 4})
    assert machine.state == Processing(progress=25)
