"""Playback Controller - per-session track-transition state machine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.music.value_objects import PlaybackState, TransitionOutcome
from ...domain.shared.exceptions import EngineError, InvalidStateError
from ...domain.shared.messages import ErrorMessages, LogTemplates
from ...utils.logging import session_logger

if TYPE_CHECKING:
    from ...domain.music.entities import Track, TrackQueue
    from ...domain.shared.types import SessionIdField
    from ..interfaces.audio_engine import AudioEngine, EngineHandle, TrackEndListener
    from ..interfaces.notifier import PlaybackNotifier

logger = logging.getLogger(__name__)


class PlaybackController:
    """Binds the head of a session's queue to the audio engine.

    The controller is either ``IDLE`` or ``PLAYING(track, handle, generation)``.
    ``generation`` increases on every transition, and each engine handle is
    subscribed with the generation that was current when it was bound. A
    track-end signal carrying any other generation has been superseded (by a
    skip, or a teardown) and is discarded, so the queue advances exactly once
    per track.

    Every method must be called with the owning session's lock held.
    """

    def __init__(
        self,
        *,
        session_id: SessionIdField,
        queue: TrackQueue,
        engine: AudioEngine,
        notifier: PlaybackNotifier | None,
        track_end_listener: TrackEndListener,
    ) -> None:
        self._session_id = session_id
        self._queue = queue
        self._engine = engine
        self._notifier = notifier
        # One stable listener per session, re-armed with a fresh generation on every bind.
        self._track_end_listener = track_end_listener

        self._state = PlaybackState.IDLE
        self._active_track: Track | None = None
        self._handle: EngineHandle | None = None
        self._generation = 0
        self._paused = False

        self._log = session_logger(logger, session_id)

    @property
    def session_id(self) -> SessionIdField:
        return self._session_id

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def active_track(self) -> Track | None:
        return self._active_track

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def is_paused(self) -> bool:
        return self._paused

    # ─────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────

    async def start(self, track: Track) -> None:
        """Bind ``track`` and enter PLAYING.

        Only valid from IDLE, and only for the current queue head: the play
        command calls this when its ``add`` turned an empty queue non-empty.
        """
        if self._state is not PlaybackState.IDLE:
            raise InvalidStateError("start", self._state.value)
        if self._queue.peek_head() != track:
            raise InvalidStateError(
                "start", self._state.value, message=ErrorMessages.START_REQUIRES_HEAD
            )

        await self._bind(track)

    async def on_track_end(self, signal_generation: int) -> TransitionOutcome:
        """Handle an end-of-track signal raised by the engine."""
        if self._state is PlaybackState.IDLE or signal_generation != self._generation:
            self._log.debug(
                LogTemplates.TRACK_END_STALE, signal_generation, self._generation
            )
            return TransitionOutcome.STALE

        if self._active_track is not None:
            self._log.debug(LogTemplates.TRACK_FINISHED, self._active_track.title)

        next_track = await self._advance()
        return TransitionOutcome.ADVANCED if next_track else TransitionOutcome.TORN_DOWN

    async def skip(self) -> Track | None:
        """Stop the current track and advance; return the new head, or None if the queue ended."""
        if self._state is PlaybackState.IDLE or self._handle is None:
            raise InvalidStateError("skip", self._state.value)

        skipped = self._active_track

        # Bump first: the end-of-track signal that stop() triggers must arrive stale.
        self._generation += 1
        try:
            self._handle.stop()
        except EngineError as exc:
            await self._fail_safe(exc)
            raise

        if skipped is not None:
            self._log.info(LogTemplates.TRACK_SKIPPED, skipped.title)

        return await self._advance()

    async def pause(self) -> Track:
        """Pause the engine and return the track being paused."""
        handle, track = self._require_playing("pause")
        try:
            handle.pause()
        except EngineError as exc:
            await self._fail_safe(exc)
            raise

        self._paused = True
        self._log.debug(LogTemplates.PLAYBACK_PAUSED)
        return track

    async def resume(self) -> Track:
        """Resume the engine and return the track being resumed."""
        handle, track = self._require_playing("resume")
        try:
            handle.resume()
        except EngineError as exc:
            await self._fail_safe(exc)
            raise

        self._paused = False
        self._log.debug(LogTemplates.PLAYBACK_RESUMED)
        return track

    async def shutdown(self) -> None:
        """Stop streaming and reset to IDLE without touching the voice connection.

        Used when the session is discarded because the bot already lost the guild.
        """
        handle = self._handle
        self._reset()
        if handle is None:
            return

        try:
            handle.stop()
        except EngineError as exc:
            self._log.warning(LogTemplates.ENGINE_STOP_ON_SHUTDOWN_FAILED, exc)

    # ─────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────

    def _require_playing(self, operation: str) -> tuple[EngineHandle, Track]:
        if (
            self._state is PlaybackState.IDLE
            or self._handle is None
            or self._active_track is None
        ):
            raise InvalidStateError(operation, self._state.value)
        return self._handle, self._active_track

    async def _bind(self, track: Track) -> None:
        if not self._state.can_transition_to(PlaybackState.PLAYING):
            raise InvalidStateError("bind", self._state.value)

        try:
            handle = await self._engine.bind(self._session_id, track.source_handle)
        except EngineError as exc:
            await self._fail_safe(exc)
            raise

        self._generation += 1
        self._state = PlaybackState.PLAYING
        self._active_track = track
        self._handle = handle
        self._paused = False

        handle.subscribe(self._track_end_listener, self._generation)
        self._log.info(LogTemplates.TRACK_STARTED, track.title, self._generation)

        await self._announce(track)

    async def _advance(self) -> Track | None:
        next_track = self._queue.advance()
        if next_track is None:
            await self._teardown()
            return None

        await self._bind(next_track)
        return next_track

    async def _teardown(self) -> None:
        """Queue exhausted: clear, go IDLE, leave the voice channel. No announcement."""
        self._reset()
        self._log.info(LogTemplates.QUEUE_EXHAUSTED)

        try:
            await self._engine.disconnect(self._session_id)
        except EngineError as exc:
            self._log.warning(LogTemplates.ENGINE_DISCONNECT_ON_TEARDOWN_FAILED, exc)

    async def _fail_safe(self, error: EngineError) -> None:
        """Force the session to IDLE with an empty queue after an engine failure."""
        self._log.error(LogTemplates.ENGINE_FAILURE, error.operation, error)
        self._reset()

        try:
            await self._engine.disconnect(self._session_id)
        except EngineError as exc:
            self._log.warning(LogTemplates.ENGINE_DISCONNECT_AFTER_FAILURE, exc)

    def _reset(self) -> None:
        self._queue.clear()
        self._generation += 1
        self._state = PlaybackState.IDLE
        self._active_track = None
        self._handle = None
        self._paused = False

    async def _announce(self, track: Track) -> None:
        if self._notifier is None:
            return

        try:
            await self._notifier.now_playing(self._session_id, track)
        except Exception:
            self._log.exception(LogTemplates.NOTIFY_FAILED, track.title)
