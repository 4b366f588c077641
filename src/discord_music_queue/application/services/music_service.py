"""Music Command Service - the boundary between chat commands and sessions."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import (
    CurrentTrackRemovalError,
    InvalidStateError,
    QueuePositionOutOfRangeError,
)
from ...domain.shared.messages import LogTemplates
from .command_models import PlayResult, SkipResult

if TYPE_CHECKING:
    from ...domain.music.entities import Track
    from ...domain.shared.types import ChannelIdField, NonEmptyStr, SessionIdField
    from ..interfaces.audio_resolver import AudioResolver
    from .session_registry import GuildSession, SessionRegistry

logger = logging.getLogger(__name__)

VoiceConnector = Callable[[], Awaitable[None]]


class MusicCommandService:
    """Runs play, skip, remove, pause, unpause and queue commands against a session.

    Every queue read or mutation happens inside the session lock. Source
    resolution is network-bound and runs before the lock is taken.
    """

    def __init__(
        self,
        *,
        session_registry: SessionRegistry,
        audio_resolver: AudioResolver,
    ) -> None:
        self._registry = session_registry
        self._resolver = audio_resolver

    async def on_play(
        self,
        session_id: SessionIdField,
        query: NonEmptyStr,
        *,
        text_channel_id: ChannelIdField | None = None,
        requested_by: NonEmptyStr | None = None,
        connect: VoiceConnector | None = None,
    ) -> PlayResult:
        """Resolve ``query`` and queue it, starting playback if the queue was empty.

        ``connect`` joins the requester's voice channel. It is awaited under the
        session lock, and only when the queue is empty, so a queue that ran out
        (and left voice) while ``query`` was resolving is rejoined before binding.

        Raises:
            ResolveError: The query could not be resolved; nothing was queued.
            EngineError: Joining voice failed (operation ``connect``; nothing was
                queued), or binding failed (the session was reset to IDLE).
        """
        track = await self._resolver.resolve(query)
        if requested_by:
            track = track.with_requester(requested_by)

        session = self._registry.get_or_create(session_id, text_channel_id=text_channel_id)
        async with session.lock:
            if connect is not None and session.queue.is_empty():
                await connect()

            was_empty = session.queue.add(track)
            if was_empty:
                await session.controller.start(track)
                return PlayResult.now_playing(track)

            position = session.queue.size()

        logger.info(LogTemplates.QUEUE_ENQUEUED, track.title, position, session_id)
        return PlayResult.added_to_queue(track, position)

    async def on_skip(self, session_id: SessionIdField) -> SkipResult:
        """Skip the playing track.

        Raises:
            InvalidStateError: Nothing is playing.
            EngineError: Stopping or rebinding failed; the session was reset to IDLE.
        """
        session = self._require_session(session_id, "skip")
        async with session.lock:
            skipped = session.controller.active_track
            next_track = await session.controller.skip()

        if next_track is None:
            return SkipResult.ended(skipped)
        return SkipResult.now_playing(skipped, next_track)

    async def on_remove(self, session_id: SessionIdField, position: int) -> Track:
        """Remove the track at 1-based ``position``.

        Raises:
            QueueIndexError: Position 1, or a position outside the queue.
        """
        session = self._registry.get(session_id)
        if session is None:
            if position == 1:
                raise CurrentTrackRemovalError()
            raise QueuePositionOutOfRangeError(position, 0)

        async with session.lock:
            track = session.queue.remove_at(position)

        logger.info(LogTemplates.QUEUE_REMOVED, track.title, position, session_id)
        return track

    async def on_pause(self, session_id: SessionIdField) -> Track:
        """Pause playback and return the paused track."""
        session = self._require_session(session_id, "pause")
        async with session.lock:
            return await session.controller.pause()

    async def on_unpause(self, session_id: SessionIdField) -> Track:
        """Resume playback and return the resumed track."""
        session = self._require_session(session_id, "resume")
        async with session.lock:
            return await session.controller.resume()

    async def list_queue(self, session_id: SessionIdField) -> list[Track]:
        """Copy of the queue, head first. The lock is held only for the copy."""
        session = self._registry.get(session_id)
        if session is None:
            return []

        async with session.lock:
            return session.queue.snapshot()

    def _require_session(self, session_id: SessionIdField, operation: str) -> GuildSession:
        session = self._registry.get(session_id)
        if session is None:
            raise InvalidStateError(operation, "idle")
        return session
