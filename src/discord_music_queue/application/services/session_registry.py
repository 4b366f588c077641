"""Session Registry - maps a guild to its queue, controller and lock."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING

from ...domain.music.entities import TrackQueue
from ...domain.shared.exceptions import DomainError
from ...domain.shared.messages import LogTemplates
from .playback_controller import PlaybackController

if TYPE_CHECKING:
    from ...domain.shared.types import ChannelIdField, SessionIdField
    from ..interfaces.audio_engine import AudioEngine
    from ..interfaces.notifier import PlaybackNotifier

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class GuildSession:
    """One voice session. ``lock`` guards ``queue`` and ``controller``."""

    session_id: SessionIdField
    queue: TrackQueue
    controller: PlaybackController
    text_channel_id: ChannelIdField | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class SessionRegistry:
    """Owns every live GuildSession and serializes access to each one.

    Sessions are created on the first play command in a guild and kept after
    their queue is exhausted (reset to IDLE), so a session's lock is never
    swapped out from under a waiting task.
    """

    def __init__(
        self,
        *,
        engine: AudioEngine,
        notifier: PlaybackNotifier | None = None,
    ) -> None:
        self._engine = engine
        self._notifier = notifier
        self._sessions: dict[SessionIdField, GuildSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: SessionIdField) -> GuildSession | None:
        return self._sessions.get(session_id)

    def get_or_create(
        self,
        session_id: SessionIdField,
        *,
        text_channel_id: ChannelIdField | None = None,
    ) -> GuildSession:
        """Return the guild's session, creating it if needed.

        A given ``text_channel_id`` becomes the channel announcements go to.
        """
        session = self._sessions.get(session_id)
        if session is None:
            queue = TrackQueue()
            controller = PlaybackController(
                session_id=session_id,
                queue=queue,
                engine=self._engine,
                notifier=self._notifier,
                track_end_listener=partial(self.dispatch_track_end, session_id),
            )
            session = GuildSession(session_id=session_id, queue=queue, controller=controller)
            self._sessions[session_id] = session
            logger.info(LogTemplates.SESSION_CREATED, session_id)

        if text_channel_id is not None:
            session.text_channel_id = text_channel_id
        return session

    def text_channel_for(self, session_id: SessionIdField) -> ChannelIdField | None:
        session = self._sessions.get(session_id)
        return session.text_channel_id if session else None

    async def discard(self, session_id: SessionIdField) -> bool:
        """Drop a session after stopping its playback. Returns False if none existed."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        async with session.lock:
            await session.controller.shutdown()

        logger.info(LogTemplates.SESSION_DISCARDED, session_id)
        return True

    async def discard_all(self) -> int:
        """Discard every session, stopping its stream. Returns how many were dropped."""
        session_ids = list(self._sessions)
        for session_id in session_ids:
            await self.discard(session_id)
        return len(session_ids)

    async def dispatch_track_end(self, session_id: SessionIdField, generation: int) -> None:
        """End-of-track listener shared by every handle bound for ``session_id``.

        Looks the session up when the signal fires, so a handle never keeps a
        stale reference to session state.
        """
        session = self._sessions.get(session_id)
        if session is None:
            logger.debug(LogTemplates.SESSION_NOT_FOUND, session_id)
            return

        async with session.lock:
            try:
                outcome = await session.controller.on_track_end(generation)
            except DomainError as exc:
                logger.error(LogTemplates.TRACK_END_TRANSITION_FAILED, session_id, exc)
                return

        logger.debug(LogTemplates.TRACK_END_HANDLED, session_id, generation, outcome.value)
