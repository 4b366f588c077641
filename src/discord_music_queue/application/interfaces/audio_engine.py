"""Port interfaces for the audio engine that streams tracks into a voice channel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from discord_music_queue.domain.shared.types import SessionIdField

TrackEndListener = Callable[[int], Awaitable[None]]
"""Coroutine function awaited with the generation a handle was tagged with."""


class EngineHandle(ABC):
    """A source bound to the engine and currently streaming (or paused)."""

    @abstractmethod
    def subscribe(self, listener: TrackEndListener, generation: int) -> None:
        """Arrange for ``listener(generation)`` to be awaited once the track ends.

        The track may end naturally or because :meth:`stop` was called; either
        way the listener fires exactly once.
        """
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop streaming. Raises EngineError on failure."""
        ...

    @abstractmethod
    def pause(self) -> None:
        ...

    @abstractmethod
    def resume(self) -> None:
        ...


class AudioEngine(ABC):
    """Interface for binding audio sources to a session's voice connection."""

    @abstractmethod
    async def bind(self, session_id: SessionIdField, source_handle: Any) -> EngineHandle:
        """Start streaming ``source_handle``. Raises EngineError on failure."""
        ...

    @abstractmethod
    async def disconnect(self, session_id: SessionIdField) -> None:
        """Leave the session's voice channel. Raises EngineError on failure."""
        ...
