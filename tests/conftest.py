"""Shared fixtures: a track factory, an in-memory audio engine and a mock notifier."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from discord_music_queue.application.interfaces.audio_engine import (
    AudioEngine,
    EngineHandle,
    TrackEndListener,
)
from discord_music_queue.application.interfaces.notifier import PlaybackNotifier
from discord_music_queue.domain.music.entities import Track
from discord_music_queue.domain.shared.exceptions import EngineError

# ============================================================================
# Fake audio engine
# ============================================================================


class FakeHandle(EngineHandle):
    """Records control calls; :meth:`finish` plays the role of the player thread."""

    def __init__(self, source_handle):
        self.source_handle = source_handle
        self.listener: TrackEndListener | None = None
        self.generation: int | None = None
        self.stopped = False
        self.paused = False
        self.fail_with: EngineError | None = None

    def subscribe(self, listener, generation):
        self.listener = listener
        self.generation = generation

    async def finish(self) -> None:
        """Deliver the end-of-track signal this handle was subscribed with."""
        assert self.listener is not None
        await self.listener(self.generation)

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def stop(self):
        self._maybe_fail()
        self.stopped = True

    def pause(self):
        self._maybe_fail()
        self.paused = True

    def resume(self):
        self._maybe_fail()
        self.paused = False


class FakeEngine(AudioEngine):
    """In-memory engine. With ``require_voice`` set, ``bind`` fails unless connected."""

    def __init__(self):
        self.handles: list[FakeHandle] = []
        self.disconnects: list[int] = []
        self.connects: list[tuple[int, int]] = []
        self.connected: set[int] = set()
        self.require_voice = False
        self.fail_bind = False
        self.fail_connect = False
        self.fail_disconnect = False

    @property
    def last_handle(self) -> FakeHandle:
        return self.handles[-1]

    @property
    def bound_sources(self) -> list:
        return [h.source_handle for h in self.handles]

    async def ensure_connected(self, session_id, channel_id):
        if self.fail_connect:
            raise EngineError("connect", "connect failed")
        self.connects.append((session_id, channel_id))
        self.connected.add(session_id)

    async def bind(self, session_id, source_handle):
        if self.fail_bind:
            raise EngineError("bind", "bind failed")
        if self.require_voice and session_id not in self.connected:
            raise EngineError("bind", "not connected")
        handle = FakeHandle(source_handle)
        self.handles.append(handle)
        return handle

    async def disconnect(self, session_id):
        self.disconnects.append(session_id)
        self.connected.discard(session_id)
        if self.fail_disconnect:
            raise EngineError("disconnect", "disconnect failed")


# ============================================================================
# Fixtures
# ============================================================================

GUILD_ID = 111111111111111111
TEXT_CHANNEL_ID = 222222222222222222


def make_track(title: str = "Test Track", duration: int = 180, **kwargs) -> Track:
    """Build a track whose source handle is a readable marker string."""
    kwargs.setdefault("source_handle", f"src:{title}")
    return Track(title=title, duration_seconds=duration, **kwargs)


@pytest.fixture
def track_factory():
    return make_track


@pytest.fixture
def sample_track():
    return make_track(
        "Test Track",
        180,
        thumbnail_url="https://example.com/thumb.jpg",
        webpage_url="https://youtube.com/watch?v=test123",
    )


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def notifier():
    mock = AsyncMock(spec=PlaybackNotifier)
    mock.now_playing = AsyncMock()
    return mock
