import asyncio
from collections import defaultdict

import pytest

from clipscribe.errors import BackendError
from clipscribe.gateway.events import EventBus
from clipscribe.models.clip import Clip, GenerationResult
from clipscribe.pipeline.state_machine import AppStateMachine
from clipscribe.utils.progress import set_verbose


class FakeGateway:
    """Gateway whose requests stay pending until the test resolves them."""

    name = "fake"

    def __init__(self, events):
        self.events = events
        self.calls = []
        self.pending = defaultdict(list)

    def _request(self, operation, *args):
        self.calls.append((operation, args))
        future = asyncio.get_running_loop().create_future()
        self.pending[operation].append(future)
        return future

    def count(self, operation):
        return sum(1 for op, _ in self.calls if op == operation)

    def resolve(self, operation, value, index=-1):
        self.pending[operation][index].set_result(value)

    def fail(self, operation, message, index=-1):
        self.pending[operation][index].set_exception(BackendError(operation, message))

    async def generate_transcript(self, video_path):
        return await self._request("generate_transcript", video_path)

    async def analyze_for_clips(self, transcript_path, video_path, user_context):
        return await self._request("analyze", transcript_path, video_path, user_context)

    async def generate_clips(self, video_path, clips):
        return await self._request("generate", video_path, tuple(clips))

    async def validate_api_key(self, api_key):
        return await self._request("validate_api_key", api_key)

    async def save_api_key(self, api_key):
        return await self._request("save_api_key", api_key)

    async def get_api_key(self):
        return await self._request("get_api_key")

    async def open_in_file_explorer(self, path):
        return await self._request("open_in_file_explorer", path)


async def settle():
    """Let pending tasks run up to their next await."""
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def _quiet_logs():
    set_verbose(False)
    yield
    set_verbose(False)


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def gateway(events):
    return FakeGateway(events)


@pytest.fixture
def machine(gateway, events):
    m = AppStateMachine(gateway, events)
    yield m
    m.close()


@pytest.fixture
def make_clip():
    def _make(clip_id, title="Clip", start="00:00:00", end="00:00:10", **extra):
        return Clip(id=clip_id, title=title, start_time=start, end_time=end, **extra)

    return _make


@pytest.fixture
def sample_clips(make_clip):
    return [
        make_clip("c1", "Intro", "00:00:00", "00:00:30"),
        make_clip("c2", "Key Moment", "00:01:00", "00:01:45"),
    ]


@pytest.fixture
def settle_tasks():
    return settle


@pytest.fixture
def generation_result():
    def _make(output_directory="/out", clip_count=1):
        return GenerationResult(output_directory=output_directory, clip_count=clip_count)

    return _make
